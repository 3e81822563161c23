import json

import pytest

from conftest import TOURNAMENT_ID, make_game
from gambitresults.cli import EXIT_BAD_INPUT, EXIT_INVALID, EXIT_OK, main


@pytest.fixture
def games_file(tmp_path):
    path = tmp_path / "games.json"
    games = [make_game(1), make_game(2), make_game(3, result="1-0")]
    path.write_text(json.dumps({"games": [game.to_dict() for game in games]}))
    return path


def _csv(tmp_path, content):
    path = tmp_path / "results.csv"
    path.write_text(content)
    return path


def test_check_valid_sheet(tmp_path, games_file, capsys):
    sheet = _csv(tmp_path, "board,result\n1,1-0\n2,draw\n")

    code = main(["check", str(games_file), str(sheet), "--tournament", str(TOURNAMENT_ID)])

    out = capsys.readouterr().out
    assert code == EXIT_OK
    assert "CSV: 2 row(s), 2 matched, 2 staged" in out
    assert "All results valid." in out


def test_check_reports_invalid_rows(tmp_path, games_file, capsys):
    sheet = _csv(tmp_path, "board,result\n1,2-0\n")

    code = main(["check", str(games_file), str(sheet), "--tournament", str(TOURNAMENT_ID)])

    out = capsys.readouterr().out
    assert code == EXIT_INVALID
    assert "INVALID" in out
    assert "Invalid result format: '2-0'" in out


def test_forfeit_needs_actor(tmp_path, games_file, capsys):
    sheet = _csv(tmp_path, "board,result\n2,0-1F\n")
    args = ["check", str(games_file), str(sheet), "--tournament", str(TOURNAMENT_ID)]

    assert main(args) == EXIT_INVALID
    assert main(args + ["--actor", "arbiter"]) == EXIT_OK
    assert "pending" in capsys.readouterr().out


def test_save_writes_updated_games(tmp_path, games_file):
    sheet = _csv(tmp_path, "board,result\n1,0-1\n")
    out = tmp_path / "updated.json"

    code = main(
        [
            "check",
            str(games_file),
            str(sheet),
            "--tournament",
            str(TOURNAMENT_ID),
            "--save",
            str(out),
        ]
    )

    assert code == EXIT_OK
    saved = {game["id"]: game for game in json.loads(out.read_text())["games"]}
    assert saved[1]["result"] == "0-1"
    assert saved[1]["arbiter_notes"] == "Imported from CSV row 2"
    assert saved[3]["result"] == "1-0"


def test_save_is_skipped_when_invalid(tmp_path, games_file):
    sheet = _csv(tmp_path, "board,result\n1,0-1\n2,bogus\n")
    out = tmp_path / "updated.json"

    code = main(
        [
            "check",
            str(games_file),
            str(sheet),
            "--tournament",
            str(TOURNAMENT_ID),
            "--save",
            str(out),
        ]
    )

    assert code == EXIT_INVALID
    assert not out.exists()


def test_config_file_supplies_tournament_and_actor(tmp_path, games_file):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"tournament_id": TOURNAMENT_ID, "actor": "arbiter"}))
    sheet = _csv(tmp_path, "board,result\n2,0-1F\n")

    assert main(["check", str(games_file), str(sheet), "--config", str(config)]) == EXIT_OK


def test_missing_tournament_is_bad_input(tmp_path, games_file, capsys):
    sheet = _csv(tmp_path, "board,result\n1,1-0\n")

    code = main(["check", str(games_file), str(sheet)])

    assert code == EXIT_BAD_INPUT
    assert "--tournament or --config" in capsys.readouterr().err


def test_missing_games_file_is_bad_input(tmp_path):
    sheet = _csv(tmp_path, "board,result\n1,1-0\n")

    assert (
        main(["check", str(tmp_path / "nope.json"), str(sheet), "--tournament", "7"])
        == EXIT_BAD_INPUT
    )


def test_unmatched_sheet_is_invalid(tmp_path, games_file, capsys):
    sheet = _csv(tmp_path, "board,result\n9,1-0\n")

    code = main(["check", str(games_file), str(sheet), "--tournament", str(TOURNAMENT_ID)])

    assert code == EXIT_INVALID
    assert "No matching game found for board 9" in capsys.readouterr().out
