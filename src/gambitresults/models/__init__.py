from gambitresults.models.audit import ApprovalRequest, AuditRecord
from gambitresults.models.csv_import import (
    CsvImportError,
    CsvImportResult,
    CsvResultRow,
)
from gambitresults.models.game import Game
from gambitresults.models.result_entry import (
    EntryState,
    ResultEntry,
    ResultUpdate,
    ResultValues,
)
from gambitresults.models.validation import BatchOutcome, ValidationResult

__all__ = [
    "ApprovalRequest",
    "AuditRecord",
    "BatchOutcome",
    "CsvImportError",
    "CsvImportResult",
    "CsvResultRow",
    "EntryState",
    "Game",
    "ResultEntry",
    "ResultUpdate",
    "ResultValues",
    "ValidationResult",
]
