import asyncio

import pytest

from conftest import make_game
from gambitresults.controllers import CsvResultImporter
from gambitresults.controllers.csv_importer import (
    find_column_index,
    find_matching_game,
    parse_results_csv,
)
from gambitresults.models import CsvResultRow


@pytest.fixture
def named_games():
    return [
        make_game(1, board=1, white="Carlsen", black="Caruana"),
        make_game(2, board=2, white="Ding", black="Nepomniachtchi"),
        make_game(3, board=3, result="1-0", white="Giri", black="So"),
    ]


@pytest.fixture
def importer(reconciler, named_games):
    reconciler.load_games(named_games)
    return CsvResultImporter(reconciler)


def test_find_column_index_ignores_case_and_aliases():
    headers = ["Board #", "White Player", "Black", "Score"]

    assert find_column_index(headers, ("board", "board #")) == 0
    assert find_column_index(headers, ("white", "white player")) == 1
    assert find_column_index(headers, ("result", "score")) == 3
    assert find_column_index(headers, ("type",)) is None


def test_parse_normalizes_results_and_numbers_rows():
    content = "board,white,black,result\n1,A,B,1:0\n\n2,C,D,draw\n3,E,F,0-1F\n"

    rows, errors = parse_results_csv(content)

    assert errors == []
    assert [row.result for row in rows] == ["1-0", "1/2-1/2", "0-1F"]
    assert [row.row_number for row in rows] == [2, 4, 5]
    assert rows[0].board_number == 1
    assert rows[0].white_player == "A"


def test_parse_reports_missing_result_cell():
    rows, errors = parse_results_csv("board,result\n1,\n2,0-1\n")

    assert [row.board_number for row in rows] == [2]
    assert errors[0].row_number == 2
    assert errors[0].field == "result"


def test_parse_requires_result_column():
    rows, errors = parse_results_csv("board,white,black\n1,A,B\n")

    assert rows == []
    assert len(errors) == 1
    assert errors[0].row_number == 0
    assert "result" in errors[0].message


def test_parse_empty_file():
    rows, errors = parse_results_csv("")

    assert rows == []
    assert errors[0].message == "CSV file is empty"


def test_non_numeric_board_falls_back_to_names(named_games):
    rows, _ = parse_results_csv("board,white,black,result\nx,ding,,1-0\n")

    assert rows[0].board_number is None
    assert find_matching_game(named_games, rows[0]).id == 2


def test_board_number_wins_over_names(named_games):
    row = CsvResultRow(row_number=2, result="1-0", board_number=3, white_player="Ding")

    assert find_matching_game(named_games, row).id == 3


def test_unmatched_row_finds_nothing(named_games):
    row = CsvResultRow(row_number=2, result="1-0", white_player="Nobody")

    assert find_matching_game(named_games, row) is None


def test_import_stages_results_without_validating(importer, reconciler, backend):
    content = (
        "board,white,black,result,type,reason\n"
        "1,Carlsen,Caruana,1-0,standard,\n"
        "2,Ding,Nepomniachtchi,0-1F,white_forfeit,No show\n"
    )

    summary = importer.import_csv(content)

    assert summary.success
    assert (summary.total_rows, summary.valid_rows, summary.processed_rows) == (2, 2, 2)
    assert reconciler.modified_game_ids() == [1, 2]
    assert reconciler.entry(2).result == "0-1F"
    assert reconciler.entry(2).result_type == "white_forfeit"
    assert reconciler.entry(2).result_reason == "No show"
    assert reconciler.entry(2).requires_approval
    assert reconciler.entry(1).arbiter_notes == "Imported from CSV row 2"
    assert backend.validate_calls == []

    outcome = asyncio.run(reconciler.batch_validate())
    assert outcome.overall_valid
    assert [u.game_id for u in backend.batch_validate_calls[0].updates] == [1, 2]


def test_import_validate_only_stages_nothing(importer, reconciler):
    summary = importer.import_csv("board,result\n1,1-0\n2,0-1\n", validate_only=True)

    assert summary.success
    assert summary.valid_rows == 2
    assert summary.processed_rows == 0
    assert not reconciler.has_unsaved_changes()


def test_import_reports_unmatched_rows_but_stages_the_rest(importer, reconciler):
    summary = importer.import_csv("board,result\n1,1-0\n9,0-1\n")

    assert not summary.success
    assert summary.processed_rows == 1
    assert summary.errors[0].row_number == 3
    assert "board 9" in summary.errors[0].message
    assert reconciler.modified_game_ids() == [1]


def test_import_warns_on_duplicate_rows(importer, reconciler):
    summary = importer.import_csv("board,result\n2,1-0\n2,0-1\n")

    assert summary.success
    assert summary.warnings == ["Row 3 overrides row 2 for board 2"]
    assert reconciler.entry(2).result == "0-1"


def test_import_with_only_header_fails(importer):
    summary = importer.import_csv("board,result\n")

    assert not summary.success
    assert summary.errors[0].message == "CSV file contains no data rows"
    assert summary.to_dict()["errors"][0]["row_number"] == 0


def test_import_replaces_type_and_reason_of_corrected_forfeit(reconciler, backend):
    reconciler.load_games(
        [
            make_game(1, result="0-1F", result_type="white_forfeit"),
            make_game(2, result="1-0", result_type="standard"),
        ]
    )
    reconciler.set_field(1, "result_reason", "No show")

    summary = CsvResultImporter(reconciler).import_csv(
        "board,result,type\n1,1-0,\n2,0-1,white_default\n"
    )

    assert summary.success
    corrected = reconciler.entry(1)
    assert corrected.result == "1-0"
    assert corrected.result_type is None
    assert corrected.result_reason is None
    assert not corrected.requires_approval
    assert reconciler.entry(2).result_type == "white_default"

    asyncio.run(reconciler.batch_validate())
    sent = backend.batch_validate_calls[0].updates
    assert (sent[0].result_type, sent[0].result_reason) == (None, None)
