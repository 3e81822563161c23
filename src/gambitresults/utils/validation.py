"""Validation utilities for Gambit Results.

This module provides the local, synchronous checks on result codes. The
authoritative rules live in the validation service; these helpers only guard
the reconciler's inputs and normalise imported data.
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

from typing import List, Optional, Tuple

from gambitresults.constants import (
    APPROVAL_RESULT_CODES,
    APPROVAL_RESULT_TYPES,
    COMPATIBLE_RESULT_TYPES,
    RESULT_BLACK_WIN,
    RESULT_DRAW,
    RESULT_ONGOING,
    RESULT_WHITE_WIN,
    VALID_RESULT_CODES,
)
from gambitresults.exceptions import InvalidInputException

# Loose spellings seen in imported score sheets
_RESULT_ALIASES = {
    "1-0": RESULT_WHITE_WIN,
    "1:0": RESULT_WHITE_WIN,
    "1": RESULT_WHITE_WIN,
    "white": RESULT_WHITE_WIN,
    "w": RESULT_WHITE_WIN,
    "0-1": RESULT_BLACK_WIN,
    "0:1": RESULT_BLACK_WIN,
    "0": RESULT_BLACK_WIN,
    "black": RESULT_BLACK_WIN,
    "b": RESULT_BLACK_WIN,
    "1/2-1/2": RESULT_DRAW,
    "0.5-0.5": RESULT_DRAW,
    "0.5": RESULT_DRAW,
    "draw": RESULT_DRAW,
    "d": RESULT_DRAW,
    "=": RESULT_DRAW,
    "*": RESULT_ONGOING,
    "ongoing": RESULT_ONGOING,
    "unfinished": RESULT_ONGOING,
    "-": RESULT_ONGOING,
}


def require_result_code(result: Optional[str]) -> str:
    """Validate a result code passed to the reconciler and raise if empty.

    The vocabulary itself is not checked here, that is the validation
    service's job.

    Args:
        result: Result code to check

    Returns:
        The result code with surrounding whitespace removed

    Raises:
        InvalidInputException: If the code is None or blank
    """
    if result is None or not str(result).strip():
        raise InvalidInputException("Result code must not be empty")
    return str(result).strip()


def is_ongoing(result: Optional[str]) -> bool:
    """True for the ongoing sentinel (and for a missing result)."""
    return not result or result == RESULT_ONGOING


def requires_approval(result_type: Optional[str]) -> bool:
    """Whether a result type must be signed off by an arbiter."""
    return result_type in APPROVAL_RESULT_TYPES


def code_requires_approval(result: str) -> bool:
    """Whether the backend refuses a result code without an acting arbiter."""
    return result in APPROVAL_RESULT_CODES


def normalize_result(result: str) -> str:
    """Map common score-sheet spellings onto backend result codes.

    Unknown values are returned trimmed but otherwise unchanged so special
    codes such as ``0-1F`` survive.

    Example:
        >>> normalize_result(" 1:0 ")
        '1-0'
        >>> normalize_result("CANC")
        'CANC'
    """
    trimmed = result.strip()
    return _RESULT_ALIASES.get(trimmed.lower(), trimmed)


def expected_result_types(result: str) -> Tuple[str, ...]:
    """Result types the backend accepts for ``result`` (empty if unknown)."""
    return COMPATIBLE_RESULT_TYPES.get(result, ())


def check_result_format(result: str, result_type: Optional[str] = None) -> List[str]:
    """Check a result code and optional type against the vocabulary.

    Returns:
        Error messages, empty when the pair is well formed
    """
    errors = []
    if result not in VALID_RESULT_CODES:
        valid = ", ".join(sorted(VALID_RESULT_CODES))
        errors.append(f"Invalid result format: '{result}'. Valid formats: {valid}")

    if result_type:
        expected = expected_result_types(result)
        if result_type not in expected:
            errors.append(
                f"Result type '{result_type}' is not compatible with result "
                f"'{result}'. Expected: {', '.join(expected) or 'none'}"
            )
    return errors
