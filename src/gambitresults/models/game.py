"""Game data class."""

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
from typing import Any, Dict, Optional

from gambitresults.constants import RESULT_ONGOING


@dataclass(frozen=True)
class Game:
    """A single board in a round, as last confirmed by the backend.

    The reconciler never changes a Game; a fresh list is loaded instead.

    Attributes
    ----------
    id : int
        Backend game identifier
    tournament_id : int
        Owning tournament
    round_number : int
        Round the game belongs to (1-indexed)
    board_number : int
        Board position within the round (1-indexed)
    white_player_id : int
        ID of the white player
    black_player_id : int
        ID of the black player
    result : str
        Server-confirmed result code
    result_type : str or None
        Classification such as ``white_forfeit`` or ``timeout``
    result_reason : str or None
        Free-text reason for the result
    arbiter_notes : str or None
        Free-text notes left by the arbiter
    white_player_name : str or None
        Display name of the white player, used to match imported rows
    black_player_name : str or None
        Display name of the black player, used to match imported rows
    """

    id: int
    tournament_id: int
    round_number: int
    board_number: int
    white_player_id: int
    black_player_id: int
    result: str = RESULT_ONGOING
    result_type: Optional[str] = None
    result_reason: Optional[str] = None
    arbiter_notes: Optional[str] = None
    white_player_name: Optional[str] = None
    black_player_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "round_number": self.round_number,
            "board_number": self.board_number,
            "white_player_id": self.white_player_id,
            "black_player_id": self.black_player_id,
            "result": self.result,
            "result_type": self.result_type,
            "result_reason": self.result_reason,
            "arbiter_notes": self.arbiter_notes,
            "white_player_name": self.white_player_name,
            "black_player_name": self.black_player_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        """Deserialize game from dictionary."""
        return cls(
            id=int(data["id"]),
            tournament_id=int(data["tournament_id"]),
            round_number=int(data.get("round_number", 1)),
            board_number=int(data.get("board_number", 0)),
            white_player_id=int(data["white_player_id"]),
            black_player_id=int(data["black_player_id"]),
            result=data.get("result") or RESULT_ONGOING,
            result_type=data.get("result_type"),
            result_reason=data.get("result_reason"),
            arbiter_notes=data.get("arbiter_notes"),
            white_player_name=data.get("white_player_name"),
            black_player_name=data.get("black_player_name"),
        )
