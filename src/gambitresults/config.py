"""ReconcilerConfig data class."""

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

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from gambitresults.exceptions import InvalidConfigurationException


@dataclass
class ReconcilerConfig:
    """Settings for a result-entry session.

    Attributes
    ----------
    tournament_id : int
        Tournament whose games are being edited.
    actor : str or None
        User recorded as ``changed_by`` on every request. Approval-requiring
        results are refused by the backend without one.
    auto_validate : bool
        Validate each result as soon as it is set (ongoing results excepted).
    """

    tournament_id: int
    actor: Optional[str] = None
    auto_validate: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "tournament_id": self.tournament_id,
            "actor": self.actor,
            "auto_validate": self.auto_validate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReconcilerConfig":
        """Deserialize configuration from dictionary.

        Raises:
            InvalidConfigurationException: If required keys are missing or mistyped
        """
        if "tournament_id" not in data:
            raise InvalidConfigurationException("Missing 'tournament_id'")

        tournament_id = data["tournament_id"]
        if isinstance(tournament_id, bool) or not isinstance(tournament_id, int):
            raise InvalidConfigurationException(
                f"'tournament_id' must be an integer, got {tournament_id!r}"
            )

        actor = data.get("actor")
        if actor is not None and not isinstance(actor, str):
            raise InvalidConfigurationException(
                f"'actor' must be a string, got {actor!r}"
            )

        auto_validate = data.get("auto_validate", True)
        if not isinstance(auto_validate, bool):
            raise InvalidConfigurationException(
                f"'auto_validate' must be true or false, got {auto_validate!r}"
            )

        return cls(
            tournament_id=tournament_id, actor=actor, auto_validate=auto_validate
        )


def load_config(path: Union[str, Path]) -> ReconcilerConfig:
    """Load a :class:`ReconcilerConfig` from a JSON file.

    Raises:
        InvalidConfigurationException: If the file is unreadable or invalid
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidConfigurationException(
            f"Cannot read configuration {path}: {e}"
        ) from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Configuration {path} must contain a JSON object"
        )
    return ReconcilerConfig.from_dict(data)
