"""Contracts for the result backend.

The reconciler talks to the backend only through these two abstract
services. Implementations may sit on any transport (a desktop command bridge,
HTTP, an in-process store); any exception they raise is treated as a
transport failure.
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

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from gambitresults.models import (
    ApprovalRequest,
    AuditRecord,
    BatchOutcome,
    Game,
    ResultUpdate,
    ValidationResult,
)


@dataclass(frozen=True)
class ValidateResultRequest:
    """Request to validate a single result edit."""

    game_id: int
    result: str
    tournament_id: int
    result_type: Optional[str] = None
    changed_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "result": self.result,
            "result_type": self.result_type,
            "tournament_id": self.tournament_id,
            "changed_by": self.changed_by,
        }


@dataclass(frozen=True)
class BatchUpdateRequest:
    """Request to validate, or validate and persist, a batch of edits.

    The response lists results by position in ``updates``.
    """

    tournament_id: int
    updates: Tuple[ResultUpdate, ...]
    validate_only: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tournament_id": self.tournament_id,
            "updates": [update.to_dict() for update in self.updates],
            "validate_only": self.validate_only,
        }


class ValidationService(ABC):
    """Validates result edits without persisting them."""

    @abstractmethod
    async def validate(self, request: ValidateResultRequest) -> ValidationResult:
        """Validate one edit."""

    @abstractmethod
    async def batch_validate(self, request: BatchUpdateRequest) -> BatchOutcome:
        """Validate a batch (``request.validate_only`` is True)."""


class PersistenceService(ABC):
    """Persists result edits and serves their history."""

    @abstractmethod
    async def batch_update(self, request: BatchUpdateRequest) -> BatchOutcome:
        """Validate and persist a batch (``request.validate_only`` is False).

        A response with ``overall_valid`` False means nothing was accepted.
        """

    @abstractmethod
    async def get_audit_trail(self, game_id: int) -> List[AuditRecord]:
        """History of a game's result, newest first."""

    @abstractmethod
    async def approve_result(self, request: ApprovalRequest) -> None:
        """Record an arbiter's approval of a game's latest result."""

    @abstractmethod
    async def get_pending_approvals(self, tournament_id: int) -> List[Game]:
        """Games whose latest result still awaits approval."""
