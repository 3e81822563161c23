"""Validation outcome data classes."""

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
from typing import Any, Dict, List, Tuple

from gambitresults.constants import VALIDATION_FAILED_MESSAGE


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating one result edit.

    Attributes:
        is_valid: Whether the backend accepts the edit
        errors: Reasons the edit is rejected, in backend order
        warnings: Non-blocking remarks, in backend order
    """

    is_valid: bool
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    def __post_init__(self):
        # Lists from callers are frozen into tuples
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    @classmethod
    def valid(cls) -> "ValidationResult":
        """An empty, passing result."""
        return cls(is_valid=True)

    @classmethod
    def transport_failure(cls) -> "ValidationResult":
        """The synthetic result stored when the validation call itself failed."""
        return cls(is_valid=False, errors=(VALIDATION_FAILED_MESSAGE,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationResult":
        return cls(
            is_valid=bool(data["is_valid"]),
            errors=tuple(data.get("errors", ())),
            warnings=tuple(data.get("warnings", ())),
        )


@dataclass
class BatchOutcome:
    """Outcome of validating or saving a batch of result edits.

    Attributes:
        overall_valid: True iff every submitted edit was valid
        per_entry_results: (position in the request, validation) pairs
    """

    overall_valid: bool
    per_entry_results: List[Tuple[int, ValidationResult]] = field(
        default_factory=list
    )

    @classmethod
    def empty(cls) -> "BatchOutcome":
        """Outcome of a batch with nothing to submit."""
        return cls(overall_valid=True)

    @classmethod
    def unknown(cls) -> "BatchOutcome":
        """Outcome of a batch whose request never completed."""
        return cls(overall_valid=False)

    @classmethod
    def from_results(cls, results: List[ValidationResult]) -> "BatchOutcome":
        """Build an outcome from per-entry results in request order."""
        return cls(
            overall_valid=all(result.is_valid for result in results),
            per_entry_results=list(enumerate(results)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_valid": self.overall_valid,
            "results": [
                [index, validation.to_dict()]
                for index, validation in self.per_entry_results
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BatchOutcome":
        return cls(
            overall_valid=bool(data["overall_valid"]),
            per_entry_results=[
                (int(index), ValidationResult.from_dict(validation))
                for index, validation in data.get("results", [])
            ],
        )
