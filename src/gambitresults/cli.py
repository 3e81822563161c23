"""Command-line interface for checking and applying result sheets.

This module provides the ``gambit-results`` tool: it stages a CSV result sheet
against a JSON list of games, validates the batch, and optionally saves it.
"""

# Gambit Pairing
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from gambitresults.config import ReconcilerConfig, load_config
from gambitresults.controllers import CsvResultImporter, ResultEntryReconciler
from gambitresults.exceptions import GambitResultsException
from gambitresults.models import BatchOutcome, CsvImportResult, Game
from gambitresults.services import InMemoryResultService
from gambitresults.utils import PACKAGE_LOGGER_NAME, setup_logger

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2


def load_games(path: Path) -> List[Game]:
    """Read games from a JSON file holding a list or ``{"games": [...]}``."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("games", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of games")
    return [Game.from_dict(item) for item in data]


def save_games(path: Path, games: List[Game]) -> None:
    path.write_text(
        json.dumps({"games": [game.to_dict() for game in games]}, indent=2),
        encoding="utf-8",
    )


def print_import_report(result: CsvImportResult) -> None:
    print(
        f"CSV: {result.total_rows} row(s), {result.valid_rows} matched, "
        f"{result.processed_rows} staged"
    )
    for error in result.errors:
        print(f"  row {error.row_number}: {error.message}")
    for warning in result.warnings:
        print(f"  warning: {warning}")


def print_outcome_report(
    reconciler: ResultEntryReconciler, game_ids: List[int], outcome: BatchOutcome
) -> None:
    games = {game.id: game for game in reconciler.games()}
    for index, validation in outcome.per_entry_results:
        if not 0 <= index < len(game_ids):
            continue
        game = games[game_ids[index]]
        entry = reconciler.entry(game.id)
        status = "OK" if validation.is_valid else "INVALID"
        print(f"Board {game.board_number:>3}  {entry.result:<8} {status}")
        for message in validation.errors:
            print(f"    error: {message}")
        for message in validation.warnings:
            print(f"    warning: {message}")
    print("All results valid." if outcome.overall_valid else "Some results are invalid.")


async def run_check(
    reconciler: ResultEntryReconciler, save: bool
) -> BatchOutcome:
    if save:
        return await reconciler.save_all()
    return await reconciler.batch_validate()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gambit-results",
        description="Check and apply chess tournament result sheets",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser(
        "check", help="Validate a CSV result sheet against a games file"
    )
    check.add_argument("games", type=Path, help="JSON file with the round's games")
    check.add_argument("csv", type=Path, help="CSV result sheet")
    check.add_argument("--tournament", type=int, help="Tournament ID")
    check.add_argument("--actor", help="User recorded as changing the results")
    check.add_argument(
        "--config", type=Path, help="JSON configuration (tournament_id, actor)"
    )
    check.add_argument(
        "--save",
        type=Path,
        metavar="OUT",
        help="Save the results and write the updated games to OUT",
    )
    return parser


def _build_config(args: argparse.Namespace) -> ReconcilerConfig:
    if args.config:
        config = load_config(args.config)
    elif args.tournament is not None:
        config = ReconcilerConfig(tournament_id=args.tournament)
    else:
        raise ValueError("Either --tournament or --config is required")

    if args.actor:
        config.actor = args.actor
    config.auto_validate = False
    return config


def cmd_check(args: argparse.Namespace) -> int:
    try:
        config = _build_config(args)
        games = load_games(args.games)
        content = args.csv.read_text(encoding="utf-8")
    except (OSError, ValueError, KeyError, TypeError, GambitResultsException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    service = InMemoryResultService(games)
    reconciler = ResultEntryReconciler(service, service, config)
    reconciler.load_games(service.games(config.tournament_id))

    import_result = CsvResultImporter(reconciler).import_csv(content)
    print_import_report(import_result)
    if not import_result.processed_rows:
        return EXIT_INVALID

    game_ids = reconciler.modified_game_ids()
    outcome = asyncio.run(run_check(reconciler, save=args.save is not None))
    if reconciler.last_error is not None:
        print(f"Error: {reconciler.last_error}", file=sys.stderr)
        return EXIT_INVALID

    print_outcome_report(reconciler, game_ids, outcome)

    if args.save is not None and outcome.overall_valid:
        save_games(args.save, service.games())
        print(f"Saved {len(game_ids)} result(s) to {args.save}")

    if not outcome.overall_valid or not import_result.success:
        return EXIT_INVALID
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(logging.DEBUG)

    try:
        if args.command == "check":
            return cmd_check(args)
    except KeyboardInterrupt:
        logger.info("Check interrupted by user")
        return 130

    parser.print_help()
    return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
