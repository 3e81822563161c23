"""Shared utilities for Gambit Results."""

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

import logging
import os

from gambitresults.constants import LOG_LEVEL_ENV_VAR

PACKAGE_LOGGER_NAME = "gambitresults"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> logging.Logger:
    """Attach the package handler once; child loggers propagate to it."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

        level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
        level = getattr(logging, level_name, None)
        if not isinstance(level, int):
            level = logging.INFO
        package_logger.setLevel(level)
    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the package logging setup.

    Args:
        name: Usually the calling module's ``__name__``

    Returns:
        A standard library logger
    """
    _configure_package_logger()
    return logging.getLogger(name)


__all__ = ["setup_logger", "PACKAGE_LOGGER_NAME"]
