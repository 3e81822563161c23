"""Working-state records for result entry.

A :class:`ResultEntry` layers a user's pending edit over the values the
backend last confirmed for a game. Entries are immutable; the reconciler
replaces them as edits, validations and saves happen.
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

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Any, Dict, Optional

from gambitresults.models.game import Game
from gambitresults.models.validation import ValidationResult
from gambitresults.utils.validation import requires_approval


class EntryState(Enum):
    """
    Where an entry stands between editing and persistence.

    Derived from ``is_modified`` and the presence of a validation outcome.
    """

    CLEAN = auto()  # Matches the baseline, never validated since load
    DIRTY = auto()  # Edited, not validated
    VALIDATED = auto()  # Edited and validated, still unsaved
    SAVED = auto()  # Persisted; validation kept for display only


@dataclass(frozen=True)
class ResultValues:
    """The four editable fields of a game result."""

    result: str
    result_type: Optional[str] = None
    result_reason: Optional[str] = None
    arbiter_notes: Optional[str] = None

    @classmethod
    def from_game(cls, game: Game) -> "ResultValues":
        return cls(
            result=game.result,
            result_type=game.result_type,
            result_reason=game.result_reason,
            arbiter_notes=game.arbiter_notes,
        )


@dataclass(frozen=True)
class ResultEntry:
    """Working copy of one game's result.

    Attributes
    ----------
    game_id : int
        Game the entry belongs to
    result : str
        Working result code
    result_type : str or None
        Working result classification
    result_reason : str or None
        Working reason text
    arbiter_notes : str or None
        Working arbiter notes
    is_modified : bool
        True from the first edit until a confirmed save or a reset
    validation : ValidationResult or None
        Last known validation outcome; may be stale once edited again
    """

    game_id: int
    result: str
    result_type: Optional[str] = None
    result_reason: Optional[str] = None
    arbiter_notes: Optional[str] = None
    is_modified: bool = False
    validation: Optional[ValidationResult] = None

    @classmethod
    def from_game(cls, game: Game) -> "ResultEntry":
        """Fresh, unmodified entry holding the game's confirmed values."""
        return cls.from_values(game.id, ResultValues.from_game(game))

    @classmethod
    def from_values(cls, game_id: int, values: ResultValues) -> "ResultEntry":
        return cls(
            game_id=game_id,
            result=values.result,
            result_type=values.result_type,
            result_reason=values.result_reason,
            arbiter_notes=values.arbiter_notes,
        )

    @property
    def requires_approval(self) -> bool:
        """Whether the working result type needs an arbiter's sign-off."""
        return requires_approval(self.result_type)

    @property
    def values(self) -> ResultValues:
        return ResultValues(
            result=self.result,
            result_type=self.result_type,
            result_reason=self.result_reason,
            arbiter_notes=self.arbiter_notes,
        )

    @property
    def state(self) -> EntryState:
        if self.is_modified:
            if self.validation is not None:
                return EntryState.VALIDATED
            return EntryState.DIRTY
        if self.validation is not None:
            return EntryState.SAVED
        return EntryState.CLEAN

    @property
    def has_errors(self) -> bool:
        return self.validation is not None and bool(self.validation.errors)

    @property
    def has_warnings(self) -> bool:
        return self.validation is not None and bool(self.validation.warnings)

    def with_changes(self, **changes: Any) -> "ResultEntry":
        """Copy of the entry with ``changes`` applied."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "result": self.result,
            "result_type": self.result_type,
            "result_reason": self.result_reason,
            "arbiter_notes": self.arbiter_notes,
            "is_modified": self.is_modified,
            "requires_approval": self.requires_approval,
            "validation": (
                self.validation.to_dict() if self.validation is not None else None
            ),
        }


@dataclass(frozen=True)
class ResultUpdate:
    """One edit as submitted to the backend."""

    game_id: int
    result: str
    result_type: Optional[str] = None
    result_reason: Optional[str] = None
    arbiter_notes: Optional[str] = None
    changed_by: Optional[str] = None

    @classmethod
    def from_entry(
        cls, entry: ResultEntry, changed_by: Optional[str]
    ) -> "ResultUpdate":
        return cls(
            game_id=entry.game_id,
            result=entry.result,
            result_type=entry.result_type or None,
            result_reason=entry.result_reason or None,
            arbiter_notes=entry.arbiter_notes or None,
            changed_by=changed_by,
        )

    @property
    def values(self) -> ResultValues:
        return ResultValues(
            result=self.result,
            result_type=self.result_type,
            result_reason=self.result_reason,
            arbiter_notes=self.arbiter_notes,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "result": self.result,
            "result_type": self.result_type,
            "result_reason": self.result_reason,
            "arbiter_notes": self.arbiter_notes,
            "changed_by": self.changed_by,
        }
