"""CSV result import data classes."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CsvResultRow:
    """A parsed data row. ``row_number`` counts the header as row 1."""

    row_number: int
    result: str
    board_number: Optional[int] = None
    white_player: Optional[str] = None
    black_player: Optional[str] = None
    result_type: Optional[str] = None
    result_reason: Optional[str] = None


@dataclass(frozen=True)
class CsvImportError:
    """A problem with one row (row 0 means the whole file)."""

    row_number: int
    message: str
    field: Optional[str] = None
    row_data: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row_number": self.row_number,
            "field": self.field,
            "message": self.message,
            "row_data": self.row_data,
        }


@dataclass
class CsvImportResult:
    """Summary of a CSV import.

    Attributes
    ----------
    success : bool
        True when no errors were found
    total_rows : int
        Data rows with a result value
    valid_rows : int
        Rows that matched a loaded game
    processed_rows : int
        Rows staged into the reconciler (0 for a validate-only import)
    errors : list of CsvImportError
        Row and file level problems
    warnings : list of str
        Non-blocking remarks
    """

    success: bool
    total_rows: int = 0
    valid_rows: int = 0
    processed_rows: int = 0
    errors: List[CsvImportError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "total_rows": self.total_rows,
            "valid_rows": self.valid_rows,
            "processed_rows": self.processed_rows,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": list(self.warnings),
        }
