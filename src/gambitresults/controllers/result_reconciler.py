"""Result entry reconciliation.

This module keeps a working copy of result edits over the backend-confirmed
values of a set of games, and coordinates validation and persistence of those
edits with the result backend.
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

import asyncio
from contextlib import contextmanager
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple

from gambitresults.config import ReconcilerConfig
from gambitresults.constants import (
    OP_BATCH_VALIDATE,
    OP_SAVE_ALL,
    RESULT_CODES,
    RESULT_DRAW,
    RESULT_ONGOING,
)
from gambitresults.exceptions import (
    InvalidInputException,
    OperationInFlightException,
    PersistenceTransportException,
    TransportException,
    UnknownGameException,
    ValidationTransportException,
)
from gambitresults.models import (
    ApprovalRequest,
    AuditRecord,
    BatchOutcome,
    Game,
    ResultEntry,
    ResultUpdate,
    ResultValues,
    ValidationResult,
)
from gambitresults.services.base import (
    BatchUpdateRequest,
    PersistenceService,
    ValidateResultRequest,
    ValidationService,
)
from gambitresults.type_hints import (
    ChangeListener,
    EditableField,
    ErrorListener,
    ResultCode,
    ResultType,
)
from gambitresults.utils import setup_logger
from gambitresults.utils.validation import is_ongoing, require_result_code

logger = setup_logger(__name__)

EDITABLE_FIELDS = ("result_reason", "arbiter_notes")


class ResultEntryReconciler:
    """Working set of result edits layered over backend-confirmed games.

    This class is responsible for:
    - Tracking one :class:`ResultEntry` per loaded game
    - Validating single edits and batches through the validation service
    - Saving batches through the persistence service
    - Restoring edits to the last confirmed baseline
    - Reporting backend failures to listeners instead of raising them

    Batches are built from the modified entries in the order they first
    became modified. The request is snapshotted when the call is made and the
    response is applied against that snapshot only; a response that arrives
    after :meth:`load_games` replaced the working set is discarded.

    The reconciler is not thread-safe. Drive it from one event loop, or
    serialise access externally.

    Args:
        validation_service: Backend validating edits
        persistence_service: Backend persisting edits and serving history
        config: Tournament, acting user and validation settings
    """

    def __init__(
        self,
        validation_service: ValidationService,
        persistence_service: PersistenceService,
        config: ReconcilerConfig,
    ):
        self.validation_service = validation_service
        self.persistence_service = persistence_service
        self.config = config
        self.last_error: Optional[TransportException] = None

        self._games: Dict[int, Game] = {}
        self._entries: Dict[int, ResultEntry] = {}
        self._baselines: Dict[int, ResultValues] = {}
        # Modified game ids in order of first modification
        self._modified_order: Dict[int, None] = {}
        # Bumped by load_games; responses from older generations are dropped
        self._generation = 0
        self._in_flight: Set[str] = set()
        self._pending: Set[asyncio.Task] = set()
        self._error_listeners: List[ErrorListener] = []
        self._change_listeners: List[ChangeListener] = []

    # ========== Read model ==========

    def entries(self) -> Mapping[int, ResultEntry]:
        """Read-only snapshot of all entries keyed by game id."""
        return MappingProxyType(dict(self._entries))

    def entry(self, game_id: int) -> Optional[ResultEntry]:
        return self._entries.get(game_id)

    def games(self) -> List[Game]:
        """Loaded games in load order."""
        return list(self._games.values())

    def modified_game_ids(self) -> List[int]:
        """Modified game ids in the order they will be submitted."""
        return list(self._modified_order)

    def modified_count(self) -> int:
        return len(self._modified_order)

    def has_unsaved_changes(self) -> bool:
        return bool(self._modified_order)

    def is_busy(self, operation: str) -> bool:
        """Whether a batch operation of this kind is in flight."""
        return operation in self._in_flight

    @staticmethod
    def result_types() -> List[Tuple[ResultCode, str]]:
        """The backend's result codes as (code, label) pairs."""
        return list(RESULT_CODES)

    # ========== Listeners ==========

    def add_error_listener(self, listener: ErrorListener) -> None:
        """Register a callback receiving every reported backend failure."""
        self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        if listener in self._error_listeners:
            self._error_listeners.remove(listener)

    def add_change_listener(self, listener: ChangeListener) -> None:
        """Register a callback receiving the modified count after each change."""
        self._change_listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._change_listeners:
            self._change_listeners.remove(listener)

    def _notify_change(self) -> None:
        count = self.modified_count()
        for listener in list(self._change_listeners):
            try:
                listener(count)
            except Exception:
                logger.exception("Change listener failed")

    def _report(self, error: TransportException, cause: Exception) -> None:
        error.__cause__ = cause
        self.last_error = error
        logger.error(f"{error} ({type(cause).__name__}: {cause})")
        for listener in list(self._error_listeners):
            try:
                listener(error)
            except Exception:
                logger.exception("Error listener failed")

    # ========== Loading ==========

    def load_games(self, games: Iterable[Game]) -> None:
        """Replace the working set with fresh entries for ``games``.

        Unsaved edits are discarded; callers should check
        :meth:`has_unsaved_changes` and warn the user first.

        Args:
            games: Games with their backend-confirmed results
        """
        games = list(games)
        if self._modified_order:
            logger.warning(
                f"Discarding {len(self._modified_order)} unsaved result edit(s) on reload"
            )

        self._generation += 1
        self._games = {}
        self._entries = {}
        self._baselines = {}
        self._modified_order = {}

        for game in games:
            if game.tournament_id != self.config.tournament_id:
                logger.warning(
                    f"Game {game.id} belongs to tournament {game.tournament_id}, "
                    f"not {self.config.tournament_id}"
                )
            self._games[game.id] = game
            self._entries[game.id] = ResultEntry.from_game(game)
            self._baselines[game.id] = ResultValues.from_game(game)

        logger.info(f"Loaded {len(self._entries)} game(s)")
        self._notify_change()

    # ========== Editing ==========

    def _require_entry(self, game_id: int) -> ResultEntry:
        entry = self._entries.get(game_id)
        if entry is None:
            raise UnknownGameException(game_id)
        return entry

    def _edit(self, game_id: int, **changes) -> ResultEntry:
        entry = self._require_entry(game_id)
        updated = entry.with_changes(is_modified=True, **changes)
        self._entries[game_id] = updated
        self._modified_order.setdefault(game_id, None)
        self._notify_change()
        return updated

    def set_result(
        self,
        game_id: int,
        result: str,
        result_type: Optional[str] = None,
        auto_validate: Optional[bool] = None,
    ) -> Optional[asyncio.Task]:
        """Set a game's working result.

        Any result other than the ongoing sentinel is validated in the
        background unless automatic validation is off.

        Args:
            game_id: Game to edit
            result: New result code
            result_type: New result type; None keeps the current one and an
                empty string clears it
            auto_validate: Override ``config.auto_validate`` for this call

        Returns:
            The scheduled validation task, or None if nothing was scheduled

        Raises:
            UnknownGameException: If the game is not loaded
            InvalidInputException: If the result code is empty
        """
        result = require_result_code(result)
        changes = {"result": result}
        if result_type is not None:
            changes["result_type"] = result_type or None

        self._edit(game_id, **changes)
        logger.debug(f"Game {game_id} result set to {result}")

        if is_ongoing(result):
            return None
        return self._maybe_validate(game_id, auto_validate)

    def set_result_type(
        self,
        game_id: int,
        result_type: Optional[ResultType],
        auto_validate: Optional[bool] = None,
    ) -> Optional[asyncio.Task]:
        """Set a game's working result type and re-validate its result.

        Raises:
            UnknownGameException: If the game is not loaded
        """
        entry = self._edit(game_id, result_type=result_type or None)
        if is_ongoing(entry.result):
            return None
        return self._maybe_validate(game_id, auto_validate)

    def set_field(
        self, game_id: int, field: EditableField, value: Optional[str]
    ) -> None:
        """Set ``result_reason`` or ``arbiter_notes``; never validates.

        Raises:
            UnknownGameException: If the game is not loaded
            InvalidInputException: If ``field`` is not editable
        """
        if field not in EDITABLE_FIELDS:
            raise InvalidInputException(
                f"Field '{field}' is not editable; expected one of {EDITABLE_FIELDS}"
            )
        self._edit(game_id, **{field: value})

    def set_all_to_draw(self) -> List[asyncio.Task]:
        """Set every game not already drawn to a draw."""
        return self._set_all(RESULT_DRAW)

    def set_all_to_ongoing(self) -> List[asyncio.Task]:
        """Set every game not already ongoing back to ongoing."""
        return self._set_all(RESULT_ONGOING)

    def _set_all(self, result: str) -> List[asyncio.Task]:
        tasks = []
        for game_id, entry in list(self._entries.items()):
            if entry.result != result:
                task = self.set_result(game_id, result)
                if task is not None:
                    tasks.append(task)
        return tasks

    def reset_modified(self) -> int:
        """Restore every modified entry to its baseline.

        Returns:
            Number of entries restored
        """
        restored = 0
        for game_id in list(self._modified_order):
            baseline = self._baselines.get(game_id)
            if baseline is None:
                logger.warning(
                    f"No baseline for game {game_id}, leaving its edit untouched"
                )
                continue
            self._entries[game_id] = ResultEntry.from_values(game_id, baseline)
            del self._modified_order[game_id]
            restored += 1

        if restored:
            logger.info(f"Reset {restored} modified result(s)")
        self._notify_change()
        return restored

    # ========== Validation ==========

    def _maybe_validate(
        self, game_id: int, auto_validate: Optional[bool]
    ) -> Optional[asyncio.Task]:
        enabled = self.config.auto_validate if auto_validate is None else auto_validate
        if not enabled:
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"No running event loop, automatic validation of game {game_id} skipped"
            )
            return None

        task = loop.create_task(self._auto_validate(game_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _auto_validate(self, game_id: int) -> Optional[ValidationResult]:
        # The game may have been unloaded before the task got to run
        if game_id not in self._entries:
            return None
        return await self.validate_entry(game_id)

    async def wait_for_pending(self) -> None:
        """Wait for all scheduled automatic validations to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _store_validation(
        self,
        game_id: int,
        validation: ValidationResult,
        generation: int,
        checked: Optional[Tuple[str, Optional[str]]] = None,
    ) -> None:
        entry = self._entries.get(game_id)
        if generation != self._generation or entry is None:
            logger.debug(f"Dropping stale validation for game {game_id}")
            return
        # checked is the (result, result_type) the validation was issued for
        if checked is not None and checked != (entry.result, entry.result_type):
            logger.debug(f"Dropping outdated validation for game {game_id}")
            return
        self._entries[game_id] = entry.with_changes(validation=validation)

    async def validate_entry(self, game_id: int) -> ValidationResult:
        """Validate a game's working result with the validation service.

        Ongoing (or empty) results are not sent; a passing result is returned
        instead. A failed call stores and returns a synthetic invalid result
        and is reported to the error listeners. The outcome is not stored if
        the result or result type changed while the call was running.

        Raises:
            UnknownGameException: If the game is not loaded
        """
        entry = self._require_entry(game_id)
        if is_ongoing(entry.result):
            return ValidationResult.valid()

        generation = self._generation
        checked = (entry.result, entry.result_type)
        request = ValidateResultRequest(
            game_id=game_id,
            result=entry.result,
            tournament_id=self.config.tournament_id,
            result_type=entry.result_type or None,
            changed_by=self.config.actor,
        )

        try:
            validation = await self.validation_service.validate(request)
        except Exception as e:
            validation = ValidationResult.transport_failure()
            self._report(
                ValidationTransportException(
                    f"Failed to validate result of game {game_id}", game_id=game_id
                ),
                e,
            )

        self._store_validation(game_id, validation, generation, checked)
        return validation

    # ========== Batches ==========

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        if operation in self._in_flight:
            raise OperationInFlightException(operation)
        self._in_flight.add(operation)
        try:
            yield
        finally:
            self._in_flight.discard(operation)

    def _snapshot(
        self, validate_only: bool
    ) -> Tuple[List[ResultEntry], BatchUpdateRequest]:
        snapshot = [self._entries[game_id] for game_id in self._modified_order]
        request = BatchUpdateRequest(
            tournament_id=self.config.tournament_id,
            updates=tuple(
                ResultUpdate.from_entry(entry, self.config.actor) for entry in snapshot
            ),
            validate_only=validate_only,
        )
        return snapshot, request

    def _apply_validations(
        self, snapshot: List[ResultEntry], outcome: BatchOutcome, generation: int
    ) -> None:
        for index, validation in outcome.per_entry_results:
            if not 0 <= index < len(snapshot):
                logger.warning(
                    f"Batch response position {index} is outside the request "
                    f"({len(snapshot)} entries)"
                )
                continue
            self._store_validation(snapshot[index].game_id, validation, generation)

    async def batch_validate(self) -> BatchOutcome:
        """Validate all modified entries in one request.

        Returns:
            The backend outcome; an empty passing outcome when nothing is
            modified; an invalid outcome with no per-entry results when the
            request failed (reported to the error listeners)

        Raises:
            OperationInFlightException: If a batch validation is already running
        """
        with self._guard(OP_BATCH_VALIDATE):
            if not self._modified_order:
                return BatchOutcome.empty()

            generation = self._generation
            snapshot, request = self._snapshot(validate_only=True)
            logger.info(f"Validating {len(snapshot)} modified result(s)")

            try:
                outcome = await self.validation_service.batch_validate(request)
            except Exception as e:
                self._report(
                    ValidationTransportException(
                        f"Failed to validate {len(snapshot)} result(s)"
                    ),
                    e,
                )
                return BatchOutcome.unknown()

            self._apply_validations(snapshot, outcome, generation)
            self._notify_change()
            return outcome

    async def save_all(self) -> BatchOutcome:
        """Persist all modified entries in one request.

        On an ``overall_valid`` response every submitted entry is saved and
        its submitted values become the new baseline. An entry edited again
        while the request was in flight keeps ``is_modified``. On a rejected
        response nothing is considered saved, and each entry's validation is
        refreshed so the caller can show why. A failed request changes
        nothing and is reported to the error listeners.

        Raises:
            OperationInFlightException: If a save is already running
        """
        with self._guard(OP_SAVE_ALL):
            if not self._modified_order:
                return BatchOutcome.empty()

            generation = self._generation
            snapshot, request = self._snapshot(validate_only=False)
            logger.info(f"Saving {len(snapshot)} modified result(s)")

            try:
                outcome = await self.persistence_service.batch_update(request)
            except Exception as e:
                self._report(
                    PersistenceTransportException(
                        f"Failed to save {len(snapshot)} result(s)"
                    ),
                    e,
                )
                return BatchOutcome.unknown()

            if generation != self._generation:
                logger.warning("Games were reloaded during save, response discarded")
                return outcome

            self._apply_validations(snapshot, outcome, generation)
            if outcome.overall_valid:
                self._mark_saved(snapshot)
                logger.info(f"Saved {len(snapshot)} result(s)")
            else:
                rejected = sum(
                    1 for _, validation in outcome.per_entry_results if not validation
                )
                logger.warning(
                    f"Save rejected: {rejected} of {len(snapshot)} result(s) invalid"
                )

            self._notify_change()
            return outcome

    def _mark_saved(self, snapshot: List[ResultEntry]) -> None:
        for submitted in snapshot:
            game_id = submitted.game_id
            current = self._entries.get(game_id)
            if current is None:
                continue

            self._baselines[game_id] = submitted.values
            if current.values != submitted.values:
                logger.info(f"Game {game_id} was edited during save, still modified")
                continue

            self._entries[game_id] = current.with_changes(is_modified=False)
            self._modified_order.pop(game_id, None)

    # ========== History and approval ==========

    async def get_audit_trail(self, game_id: int) -> List[AuditRecord]:
        """History of a game's result, newest first as served by the backend.

        Returns an empty list, and reports the failure, if the call fails.
        """
        try:
            return list(await self.persistence_service.get_audit_trail(game_id))
        except Exception as e:
            self._report(
                PersistenceTransportException(
                    f"Failed to fetch audit trail of game {game_id}", game_id=game_id
                ),
                e,
            )
            return []

    async def approve_result(self, game_id: int, notes: Optional[str] = None) -> bool:
        """Approve a game's latest saved result as the configured actor.

        Returns:
            True if the backend accepted the approval

        Raises:
            UnknownGameException: If the game is not loaded
            InvalidInputException: If no actor is configured
        """
        self._require_entry(game_id)
        if not self.config.actor:
            raise InvalidInputException("Approving a result requires an actor")

        request = ApprovalRequest(
            game_id=game_id, approved_by=self.config.actor, notes=notes
        )
        try:
            await self.persistence_service.approve_result(request)
        except Exception as e:
            self._report(
                PersistenceTransportException(
                    f"Failed to approve result of game {game_id}", game_id=game_id
                ),
                e,
            )
            return False

        logger.info(f"Game {game_id} result approved by {self.config.actor}")
        return True

    async def pending_approvals(self) -> List[Game]:
        """Games of this tournament whose latest result awaits approval."""
        try:
            return list(
                await self.persistence_service.get_pending_approvals(
                    self.config.tournament_id
                )
            )
        except Exception as e:
            self._report(
                PersistenceTransportException("Failed to fetch pending approvals"), e
            )
            return []
