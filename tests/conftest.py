import asyncio
from typing import Dict, List, Optional

import pytest

from gambitresults.config import ReconcilerConfig
from gambitresults.controllers import ResultEntryReconciler
from gambitresults.models import (
    ApprovalRequest,
    AuditRecord,
    BatchOutcome,
    Game,
    ValidationResult,
)
from gambitresults.services import (
    BatchUpdateRequest,
    PersistenceService,
    ValidateResultRequest,
    ValidationService,
)

TOURNAMENT_ID = 7


def make_game(
    game_id: int,
    board: Optional[int] = None,
    result: str = "*",
    result_type: Optional[str] = None,
    white: Optional[str] = None,
    black: Optional[str] = None,
) -> Game:
    return Game(
        id=game_id,
        tournament_id=TOURNAMENT_ID,
        round_number=1,
        board_number=board if board is not None else game_id,
        white_player_id=game_id * 10,
        black_player_id=game_id * 10 + 1,
        result=result,
        result_type=result_type,
        white_player_name=white,
        black_player_name=black,
    )


class FakeBackend(ValidationService, PersistenceService):
    """Scriptable backend that records every request.

    ``error`` is raised by every call; ``gate`` (an asyncio.Event created
    inside the running loop) holds calls until it is set.
    """

    def __init__(self):
        self.validate_calls: List[ValidateResultRequest] = []
        self.batch_validate_calls: List[BatchUpdateRequest] = []
        self.batch_update_calls: List[BatchUpdateRequest] = []
        self.audit_calls: List[int] = []
        self.approvals: List[ApprovalRequest] = []
        self.validation = ValidationResult.valid()
        self.batch_response: Optional[BatchOutcome] = None
        self.save_response: Optional[BatchOutcome] = None
        self.audit: Dict[int, List[AuditRecord]] = {}
        self.pending: List[Game] = []
        self.error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None

    async def _enter(self):
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error

    @staticmethod
    def _all_valid(request: BatchUpdateRequest) -> BatchOutcome:
        return BatchOutcome.from_results(
            [ValidationResult.valid() for _ in request.updates]
        )

    async def validate(self, request):
        self.validate_calls.append(request)
        await self._enter()
        return self.validation

    async def batch_validate(self, request):
        self.batch_validate_calls.append(request)
        await self._enter()
        return self.batch_response or self._all_valid(request)

    async def batch_update(self, request):
        self.batch_update_calls.append(request)
        await self._enter()
        return self.save_response or self._all_valid(request)

    async def get_audit_trail(self, game_id):
        self.audit_calls.append(game_id)
        await self._enter()
        return self.audit.get(game_id, [])

    async def approve_result(self, request):
        await self._enter()
        self.approvals.append(request)

    async def get_pending_approvals(self, tournament_id):
        await self._enter()
        return list(self.pending)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def config():
    return ReconcilerConfig(tournament_id=TOURNAMENT_ID, actor="arbiter")


@pytest.fixture
def games():
    return [make_game(1, result="1-0"), make_game(2), make_game(3)]


@pytest.fixture
def reconciler(backend, config, games):
    reconciler = ResultEntryReconciler(backend, backend, config)
    reconciler.load_games(games)
    return reconciler


@pytest.fixture
def errors(reconciler):
    reported = []
    reconciler.add_error_listener(reported.append)
    return reported
