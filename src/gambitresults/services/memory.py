"""In-process result backend.

:class:`InMemoryResultService` implements both service contracts over a plain
dictionary of games. It applies the same rules as the tournament database
backend and is what the command-line tool and the tests run against.
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

from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from gambitresults.exceptions import ResultNotFoundException
from gambitresults.models import (
    ApprovalRequest,
    AuditRecord,
    BatchOutcome,
    Game,
    ResultUpdate,
    ValidationResult,
)
from gambitresults.services.base import (
    BatchUpdateRequest,
    PersistenceService,
    ValidateResultRequest,
    ValidationService,
)
from gambitresults.utils import setup_logger
from gambitresults.utils.validation import check_result_format, code_requires_approval

logger = setup_logger(__name__)


class InMemoryResultService(ValidationService, PersistenceService):
    """Validation and persistence over games held in memory.

    Validation rules, in order:
    - The result code is in the vocabulary and the type fits the code
    - The game exists and belongs to the tournament
    - Approval-requiring codes need an acting user and are flagged as pending

    Args:
        games: Initial games; later lists can be added with :meth:`add_games`
    """

    def __init__(self, games: Optional[Iterable[Game]] = None):
        self._games: Dict[int, Game] = {}
        self._audit: Dict[int, List[AuditRecord]] = {}
        self._next_audit_id = 1
        if games:
            self.add_games(games)

    def add_games(self, games: Iterable[Game]) -> None:
        for game in games:
            self._games[game.id] = game

    def games(self, tournament_id: Optional[int] = None) -> List[Game]:
        """Current games ordered by round and board."""
        games = [
            game
            for game in self._games.values()
            if tournament_id is None or game.tournament_id == tournament_id
        ]
        return sorted(games, key=lambda g: (g.round_number, g.board_number, g.id))

    def get_game(self, game_id: int) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise ResultNotFoundException(f"Game {game_id} not found")
        return game

    # ========== Validation ==========

    def _validate_one(
        self,
        game_id: int,
        result: str,
        result_type: Optional[str],
        tournament_id: int,
        changed_by: Optional[str],
    ) -> ValidationResult:
        errors = check_result_format(result, result_type)
        if not result:
            errors.append("Result cannot be empty")

        game = self._games.get(game_id)
        if game is None:
            errors.append(f"Game {game_id} not found")
        elif game.tournament_id != tournament_id:
            errors.append(
                f"Game {game_id} does not belong to tournament {tournament_id}"
            )

        if errors:
            return ValidationResult(is_valid=False, errors=errors)

        warnings = []
        if code_requires_approval(result):
            if changed_by is None:
                errors.append(
                    f"Result '{result}' requires arbiter approval but no authority specified"
                )
            warnings.append(
                f"Result '{result}' requires arbiter approval and will be marked as pending"
            )

        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    async def validate(self, request: ValidateResultRequest) -> ValidationResult:
        logger.debug(f"Validating game {request.game_id} result {request.result}")
        return self._validate_one(
            request.game_id,
            request.result,
            request.result_type,
            request.tournament_id,
            request.changed_by,
        )

    def _validate_batch(self, request: BatchUpdateRequest) -> BatchOutcome:
        return BatchOutcome.from_results(
            [
                self._validate_one(
                    update.game_id,
                    update.result,
                    update.result_type,
                    request.tournament_id,
                    update.changed_by,
                )
                for update in request.updates
            ]
        )

    async def batch_validate(self, request: BatchUpdateRequest) -> BatchOutcome:
        return self._validate_batch(request)

    # ========== Persistence ==========

    async def batch_update(self, request: BatchUpdateRequest) -> BatchOutcome:
        logger.info(
            f"Batch updating {len(request.updates)} results for tournament "
            f"{request.tournament_id}"
        )
        outcome = self._validate_batch(request)

        if request.validate_only:
            return outcome

        if not outcome.overall_valid:
            logger.warning("Batch validation failed, aborting updates")
            return outcome

        for update in request.updates:
            self._apply_update(update)

        logger.info(f"Batch update completed for {len(request.updates)} games")
        return outcome

    def _apply_update(self, update: ResultUpdate) -> None:
        game = self._games[update.game_id]
        self._games[update.game_id] = replace(
            game,
            result=update.result,
            result_type=update.result_type,
            result_reason=update.result_reason,
            arbiter_notes=update.arbiter_notes,
        )

        record = AuditRecord(
            id=self._next_audit_id,
            game_id=update.game_id,
            changed_at=datetime.now(timezone.utc),
            old_result=game.result,
            new_result=update.result,
            changed_by=update.changed_by,
            reason=update.result_reason,
            approved=not code_requires_approval(update.result),
        )
        self._next_audit_id += 1
        self._audit.setdefault(update.game_id, []).append(record)
        logger.debug(
            f"Game {update.game_id}: {record.old_result} -> {record.new_result}"
        )

    async def get_audit_trail(self, game_id: int) -> List[AuditRecord]:
        records = self._audit.get(game_id, [])
        return sorted(records, key=lambda r: (r.changed_at, r.id), reverse=True)

    async def approve_result(self, request: ApprovalRequest) -> None:
        records = self._audit.get(request.game_id)
        if not records:
            raise ResultNotFoundException(
                f"Game {request.game_id} has no recorded result to approve"
            )
        records[-1] = replace(
            records[-1], approved=True, approved_by=request.approved_by
        )
        logger.info(
            f"Game {request.game_id} result approved by {request.approved_by}"
        )

    async def get_pending_approvals(self, tournament_id: int) -> List[Game]:
        return [
            game
            for game in self.games(tournament_id)
            if self._audit.get(game.id) and not self._audit[game.id][-1].approved
        ]
