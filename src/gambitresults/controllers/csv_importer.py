"""CSV result import.

Reads a results sheet exported from a score-keeping tool, matches each row to
a loaded game and stages the results as edits in a
:class:`~gambitresults.controllers.result_reconciler.ResultEntryReconciler`.
Nothing is sent to the backend here; callers validate and save the staged
edits through the reconciler.
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

import csv
import io
from typing import Dict, List, Optional, Sequence, Tuple

from gambitresults.constants import CSV_IMPORT_NOTE
from gambitresults.controllers.result_reconciler import ResultEntryReconciler
from gambitresults.models import (
    CsvImportError,
    CsvImportResult,
    CsvResultRow,
    Game,
)
from gambitresults.utils import setup_logger
from gambitresults.utils.validation import normalize_result

logger = setup_logger(__name__)

# Accepted header spellings per column, compared case-insensitively
COLUMN_ALIASES = {
    "board": ("board", "board_number", "board #", "table"),
    "white": ("white", "white_player", "white player"),
    "black": ("black", "black_player", "black player"),
    "result": ("result", "score", "outcome"),
    "type": ("type", "result_type", "result type"),
    "reason": ("reason", "notes", "comment"),
}


def find_column_index(headers: Sequence[str], names: Sequence[str]) -> Optional[int]:
    """Index of the first header matching one of ``names``, ignoring case."""
    wanted = {name.lower() for name in names}
    for index, header in enumerate(headers):
        if header.strip().lower() in wanted:
            return index
    return None


def _cell(record: Sequence[str], index: Optional[int]) -> Optional[str]:
    if index is None or index >= len(record):
        return None
    value = record[index].strip()
    return value or None


def parse_results_csv(
    content: str,
) -> Tuple[List[CsvResultRow], List[CsvImportError]]:
    """Parse CSV text into result rows.

    Args:
        content: Whole CSV file, header row first

    Returns:
        Parsed rows and the problems found. A file-level problem (no header,
        no result column) is reported as a single error with row number 0.
    """
    reader = csv.reader(io.StringIO(content))
    try:
        headers = next(reader)
    except StopIteration:
        return [], [CsvImportError(row_number=0, message="CSV file is empty")]
    except csv.Error as e:
        return [], [
            CsvImportError(row_number=0, message=f"Failed to parse CSV headers: {e}")
        ]

    columns: Dict[str, Optional[int]] = {
        key: find_column_index(headers, aliases)
        for key, aliases in COLUMN_ALIASES.items()
    }
    if columns["result"] is None:
        return [], [
            CsvImportError(
                row_number=0,
                field="result",
                message=(
                    "Required column 'result' not found. "
                    "Expected columns: board, white, black, result"
                ),
                row_data=", ".join(headers),
            )
        ]

    rows: List[CsvResultRow] = []
    errors: List[CsvImportError] = []
    row_number = 1
    while True:
        row_number += 1
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            errors.append(
                CsvImportError(
                    row_number=row_number, message=f"Failed to parse CSV row: {e}"
                )
            )
            continue

        if not any(value.strip() for value in record):
            continue

        result = _cell(record, columns["result"])
        if result is None:
            errors.append(
                CsvImportError(
                    row_number=row_number,
                    field="result",
                    message="Result field is required and cannot be empty",
                    row_data=", ".join(record),
                )
            )
            continue

        board = _cell(record, columns["board"])
        try:
            board_number = int(board) if board is not None else None
        except ValueError:
            board_number = None

        rows.append(
            CsvResultRow(
                row_number=row_number,
                result=normalize_result(result),
                board_number=board_number,
                white_player=_cell(record, columns["white"]),
                black_player=_cell(record, columns["black"]),
                result_type=_cell(record, columns["type"]),
                result_reason=_cell(record, columns["reason"]),
            )
        )

    return rows, errors


def find_matching_game(games: Sequence[Game], row: CsvResultRow) -> Optional[Game]:
    """Find the game a row refers to.

    Board numbers win; player names (case-insensitive) are the fallback.
    """
    if row.board_number is not None:
        for game in games:
            if game.board_number == row.board_number:
                return game

    if row.white_player or row.black_player:
        white = (row.white_player or "").lower()
        black = (row.black_player or "").lower()
        for game in games:
            if white and (game.white_player_name or "").lower() != white:
                continue
            if black and (game.black_player_name or "").lower() != black:
                continue
            return game

    return None


def _describe_row(row: CsvResultRow) -> str:
    if row.board_number is not None:
        return f"board {row.board_number}"
    if row.white_player or row.black_player:
        return f"players {row.white_player or '?'} vs {row.black_player or '?'}"
    return "game"


class CsvResultImporter:
    """Stages CSV results into a reconciler.

    Args:
        reconciler: Reconciler holding the games of the round being imported
    """

    def __init__(self, reconciler: ResultEntryReconciler):
        self.reconciler = reconciler

    def import_csv(self, content: str, validate_only: bool = False) -> CsvImportResult:
        """Parse ``content`` and stage the matched rows.

        Staged rows are not validated one by one; run
        :meth:`ResultEntryReconciler.batch_validate` afterwards.

        Args:
            content: CSV text
            validate_only: Only parse and match, stage nothing

        Returns:
            Summary of the import
        """
        rows, errors = parse_results_csv(content)
        warnings: List[str] = []

        if not rows and not errors:
            errors.append(
                CsvImportError(row_number=0, message="CSV file contains no data rows")
            )
        if not rows:
            return CsvImportResult(success=False, errors=errors, warnings=warnings)

        games = sorted(
            self.reconciler.games(), key=lambda g: (g.board_number, g.id)
        )
        matched: List[Tuple[CsvResultRow, Game]] = []
        seen: Dict[int, int] = {}
        for row in rows:
            game = find_matching_game(games, row)
            if game is None:
                errors.append(
                    CsvImportError(
                        row_number=row.row_number,
                        message=f"No matching game found for {_describe_row(row)}",
                        row_data=f"result: {row.result}",
                    )
                )
                continue
            if game.id in seen:
                warnings.append(
                    f"Row {row.row_number} overrides row {seen[game.id]} "
                    f"for board {game.board_number}"
                )
            seen[game.id] = row.row_number
            matched.append((row, game))

        processed = 0
        if not validate_only:
            for row, game in matched:
                # A row replaces the type and reason; blank cells clear them
                self.reconciler.set_result(
                    game.id, row.result, row.result_type or "", auto_validate=False
                )
                self.reconciler.set_field(game.id, "result_reason", row.result_reason)
                self.reconciler.set_field(
                    game.id, "arbiter_notes", CSV_IMPORT_NOTE.format(row=row.row_number)
                )
                processed += 1
            logger.info(f"Staged {processed} result(s) from CSV")

        return CsvImportResult(
            success=not errors,
            total_rows=len(rows),
            valid_rows=len(matched),
            processed_rows=processed,
            errors=errors,
            warnings=warnings,
        )
