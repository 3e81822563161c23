from gambitresults.services.base import (
    BatchUpdateRequest,
    PersistenceService,
    ValidateResultRequest,
    ValidationService,
)
from gambitresults.services.memory import InMemoryResultService

__all__ = [
    "BatchUpdateRequest",
    "InMemoryResultService",
    "PersistenceService",
    "ValidateResultRequest",
    "ValidationService",
]
