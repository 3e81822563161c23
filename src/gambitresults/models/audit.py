"""Audit trail and approval data classes."""

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

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from dateutil.parser import isoparse


@dataclass(frozen=True)
class AuditRecord:
    """One server-owned entry in a game's result history.

    Records are created by the backend on every accepted save and are only
    ever read by this package.

    Attributes
    ----------
    id : int
        Backend record identifier
    game_id : int
        Game the change applies to
    changed_at : datetime
        When the change was accepted
    old_result : str or None
        Result before the change, None for the first recorded result
    new_result : str
        Result after the change
    changed_by : str or None
        Acting user; None means the change was system-originated
    reason : str or None
        Reason given with the change
    approved : bool
        Whether an arbiter has signed off the change
    approved_by : str or None
        Arbiter who approved the change
    """

    id: int
    game_id: int
    changed_at: datetime
    old_result: Optional[str]
    new_result: str
    changed_by: Optional[str] = None
    reason: Optional[str] = None
    approved: bool = False
    approved_by: Optional[str] = None

    @property
    def is_system_change(self) -> bool:
        return self.changed_by is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize audit record to dictionary."""
        return {
            "id": self.id,
            "game_id": self.game_id,
            "changed_at": self.changed_at.isoformat(),
            "old_result": self.old_result,
            "new_result": self.new_result,
            "changed_by": self.changed_by,
            "reason": self.reason,
            "approved": self.approved,
            "approved_by": self.approved_by,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditRecord":
        """Deserialize audit record from dictionary."""
        changed_at = data["changed_at"]
        if isinstance(changed_at, str):
            changed_at = isoparse(changed_at)
        return cls(
            id=int(data["id"]),
            game_id=int(data["game_id"]),
            changed_at=changed_at,
            old_result=data.get("old_result"),
            new_result=data["new_result"],
            changed_by=data.get("changed_by"),
            reason=data.get("reason"),
            approved=bool(data.get("approved", False)),
            approved_by=data.get("approved_by"),
        )


@dataclass(frozen=True)
class ApprovalRequest:
    """An arbiter's sign-off of a game's latest result."""

    game_id: int
    approved_by: str
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "approved_by": self.approved_by,
            "notes": self.notes,
        }
