"""Exceptions for use in Gambit Results"""

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

from typing import Optional

# ========== Base Application Exception ==========


class GambitResultsException(Exception):
    """Base exception for all Gambit Results errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Result Exceptions ==========


class ResultException(GambitResultsException):
    """Base exception for result entry errors."""

    pass


class UnknownGameException(ResultException):
    """Raised when an operation names a game that is not in the working set."""

    def __init__(self, game_id: int):
        super().__init__(f"Game {game_id} is not loaded")
        self.game_id = game_id


class InvalidInputException(ResultException):
    """Raised when a result edit is malformed (e.g., an empty result code)."""

    pass


class ResultNotFoundException(ResultException):
    """Raised by a backend when a requested game or result cannot be found."""

    pass


# ========== Reconciler State Exceptions ==========


class ReconcilerStateException(GambitResultsException):
    """Base exception for operations refused because of the reconciler's state."""

    pass


class OperationInFlightException(ReconcilerStateException):
    """Raised when a batch operation is started while the same kind is running."""

    def __init__(self, operation: str):
        super().__init__(f"A '{operation}' operation is already in flight")
        self.operation = operation


# ========== API Exceptions ==========


class APIException(GambitResultsException):
    """Base exception for errors talking to the result backend."""

    pass


class TransportException(APIException):
    """A backend call could not complete.

    These are reported to error listeners, never raised out of the reconciler.
    """

    def __init__(self, message: str, game_id: Optional[int] = None):
        super().__init__(message)
        self.game_id = game_id


class ValidationTransportException(TransportException):
    """Raised when the validation service cannot be reached or fails."""

    pass


class PersistenceTransportException(TransportException):
    """Raised when the persistence service cannot be reached or fails."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(GambitResultsException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
