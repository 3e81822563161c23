"""Gambit Results: result entry and reconciliation for chess tournaments.

The :class:`ResultEntryReconciler` keeps the working copy of result edits for
a round, validates and saves them through a result backend, and reports
backend failures without losing edits.
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

from gambitresults.config import ReconcilerConfig, load_config
from gambitresults.controllers import CsvResultImporter, ResultEntryReconciler
from gambitresults.models import (
    AuditRecord,
    BatchOutcome,
    EntryState,
    Game,
    ResultEntry,
    ValidationResult,
)
from gambitresults.services import (
    InMemoryResultService,
    PersistenceService,
    ValidationService,
)

__version__ = "0.1.0"

__all__ = [
    "AuditRecord",
    "BatchOutcome",
    "CsvResultImporter",
    "EntryState",
    "Game",
    "InMemoryResultService",
    "PersistenceService",
    "ReconcilerConfig",
    "ResultEntry",
    "ResultEntryReconciler",
    "ValidationResult",
    "ValidationService",
    "load_config",
]
