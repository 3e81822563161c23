import pytest

from gambitresults.exceptions import InvalidInputException
from gambitresults.utils.validation import (
    check_result_format,
    code_requires_approval,
    expected_result_types,
    is_ongoing,
    normalize_result,
    require_result_code,
    requires_approval,
)


def test_require_result_code_strips():
    assert require_result_code(" 1-0 ") == "1-0"


@pytest.mark.parametrize("value", [None, "", "  \t"])
def test_require_result_code_rejects_blank(value):
    with pytest.raises(InvalidInputException):
        require_result_code(value)


def test_is_ongoing():
    assert is_ongoing("*")
    assert is_ongoing("")
    assert is_ongoing(None)
    assert not is_ongoing("ADJ")


@pytest.mark.parametrize(
    "result_type",
    [
        "white_forfeit",
        "black_forfeit",
        "white_default",
        "black_default",
        "double_forfeit",
        "cancelled",
    ],
)
def test_approval_result_types(result_type):
    assert requires_approval(result_type)


@pytest.mark.parametrize("result_type", [None, "", "standard", "timeout", "adjourned"])
def test_result_types_without_approval(result_type):
    assert not requires_approval(result_type)


def test_code_requires_approval():
    assert code_requires_approval("0-0")
    assert code_requires_approval("CANC")
    assert not code_requires_approval("1-0T")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1:0", "1-0"),
        ("White", "1-0"),
        ("0.5-0.5", "1/2-1/2"),
        ("=", "1/2-1/2"),
        (" 0 ", "0-1"),
        ("-", "*"),
        ("0-1F", "0-1F"),
        ("something", "something"),
    ],
)
def test_normalize_result(raw, expected):
    assert normalize_result(raw) == expected


def test_expected_result_types():
    assert expected_result_types("1-0") == ("standard", "black_forfeit", "black_default")
    assert expected_result_types("9-9") == ()


def test_check_result_format():
    assert check_result_format("1/2-1/2") == []
    assert check_result_format("0-1", "white_default") == []

    errors = check_result_format("1/2-1/2", "timeout")
    assert len(errors) == 1
    assert "Expected: standard" in errors[0]

    errors = check_result_format("9-9", "standard")
    assert len(errors) == 2
    assert errors[1].endswith("Expected: none")
