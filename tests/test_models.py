import json
from datetime import datetime, timezone

import pytest

from conftest import make_game
from gambitresults.config import ReconcilerConfig, load_config
from gambitresults.exceptions import InvalidConfigurationException
from gambitresults.models import (
    AuditRecord,
    BatchOutcome,
    EntryState,
    Game,
    ResultEntry,
    ResultUpdate,
    ValidationResult,
)


class TestValidationResult:
    def test_lists_are_frozen_into_tuples(self):
        result = ValidationResult(is_valid=False, errors=["a", "b"], warnings=["w"])

        assert result.errors == ("a", "b")
        assert result.warnings == ("w",)
        assert not result

    def test_equal_results_compare_equal(self):
        assert ValidationResult(True, ["x"]) == ValidationResult(True, ("x",))
        assert ValidationResult.valid() == ValidationResult(is_valid=True)

    def test_transport_failure_has_single_error(self):
        failure = ValidationResult.transport_failure()

        assert not failure.is_valid
        assert failure.errors == ("validation failed",)

    def test_from_dict(self):
        data = {"is_valid": False, "errors": ["bad"], "warnings": []}

        assert ValidationResult.from_dict(data).to_dict() == data


class TestBatchOutcome:
    def test_from_results_enumerates_positions(self):
        outcome = BatchOutcome.from_results(
            [ValidationResult.valid(), ValidationResult(False, ["x"])]
        )

        assert not outcome.overall_valid
        assert [index for index, _ in outcome.per_entry_results] == [0, 1]

    def test_empty_and_unknown(self):
        assert BatchOutcome.empty().overall_valid
        assert not BatchOutcome.unknown().overall_valid
        assert BatchOutcome.unknown().per_entry_results == []

    def test_from_dict_reads_result_pairs(self):
        outcome = BatchOutcome.from_dict(
            {
                "overall_valid": False,
                "results": [[1, {"is_valid": False, "errors": ["Board closed"]}]],
            }
        )

        assert outcome.per_entry_results == [
            (1, ValidationResult(is_valid=False, errors=("Board closed",)))
        ]


class TestGame:
    def test_from_dict_defaults_missing_result_to_ongoing(self):
        game = Game.from_dict(
            {
                "id": "5",
                "tournament_id": 7,
                "board_number": 3,
                "white_player_id": 1,
                "black_player_id": 2,
                "result": None,
            }
        )

        assert game.id == 5
        assert game.round_number == 1
        assert game.result == "*"

    def test_to_dict_from_dict(self):
        game = make_game(4, result="1-0T", result_type="timeout", white="Ann")

        assert Game.from_dict(game.to_dict()) == game


class TestResultEntry:
    def test_states(self):
        entry = ResultEntry.from_game(make_game(1))
        assert entry.state is EntryState.CLEAN

        dirty = entry.with_changes(is_modified=True, result="1-0")
        assert dirty.state is EntryState.DIRTY

        rejected = dirty.with_changes(validation=ValidationResult(False, ["no"]))
        assert rejected.state is EntryState.VALIDATED
        assert rejected.has_errors
        assert not rejected.has_warnings

        saved = rejected.with_changes(is_modified=False)
        assert saved.state is EntryState.SAVED

    def test_requires_approval_follows_result_type(self):
        entry = ResultEntry.from_game(make_game(1, result_type="double_forfeit"))

        assert entry.requires_approval
        assert not entry.with_changes(result_type="timeout").requires_approval
        assert not entry.with_changes(result_type=None).requires_approval

    def test_to_dict_includes_invalid_validation(self):
        entry = ResultEntry.from_game(make_game(1)).with_changes(
            validation=ValidationResult(False, ["no"])
        )

        assert entry.to_dict()["validation"] == {
            "is_valid": False,
            "errors": ["no"],
            "warnings": [],
        }

    def test_update_sends_blank_text_as_none(self):
        entry = ResultEntry(
            game_id=3, result="0-1", result_type="", result_reason="", arbiter_notes="n"
        )

        update = ResultUpdate.from_entry(entry, "arbiter")

        assert update.result_type is None
        assert update.result_reason is None
        assert update.arbiter_notes == "n"
        assert update.changed_by == "arbiter"


class TestAuditRecord:
    def test_from_dict_parses_timestamp(self):
        record = AuditRecord.from_dict(
            {
                "id": 1,
                "game_id": 2,
                "changed_at": "2025-03-01T12:30:00+00:00",
                "old_result": None,
                "new_result": "1-0",
            }
        )

        assert record.changed_at == datetime(2025, 3, 1, 12, 30, tzinfo=timezone.utc)
        assert record.old_result is None
        assert record.is_system_change
        assert not record.approved
        assert AuditRecord.from_dict(record.to_dict()) == record

    def test_from_dict_accepts_utc_suffix(self):
        record = AuditRecord.from_dict(
            {
                "id": 3,
                "game_id": 2,
                "changed_at": "2025-03-01T12:30:00Z",
                "old_result": "*",
                "new_result": "0-1F",
                "changed_by": "arbiter",
                "approved": False,
            }
        )

        assert record.changed_at.utcoffset().total_seconds() == 0
        assert not record.is_system_change


class TestConfig:
    def test_from_dict_defaults(self):
        config = ReconcilerConfig.from_dict({"tournament_id": 7})

        assert config.actor is None
        assert config.auto_validate

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"tournament_id": "7"},
            {"tournament_id": True},
            {"tournament_id": 7, "actor": 3},
            {"tournament_id": 7, "auto_validate": "yes"},
        ],
    )
    def test_from_dict_rejects_bad_data(self, data):
        with pytest.raises(InvalidConfigurationException):
            ReconcilerConfig.from_dict(data)

    def test_load_config(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"tournament_id": 7, "actor": "arbiter", "auto_validate": False})
        )

        config = load_config(path)

        assert config == ReconcilerConfig(7, "arbiter", False)
        assert config.to_dict()["actor"] == "arbiter"

    def test_load_config_errors(self, tmp_path):
        with pytest.raises(InvalidConfigurationException):
            load_config(tmp_path / "missing.json")

        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(InvalidConfigurationException):
            load_config(path)
