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

"""
Qt signal bridge for the result reconciler.

Views bind to these signals to show error toasts and the modified-results
badge without the reconciler knowing about Qt.
"""

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from gambitresults.controllers.result_reconciler import ResultEntryReconciler
from gambitresults.utils import setup_logger

logger = setup_logger(__name__)


class ReconcilerSignals(QObject):
    """
    Re-emits reconciler notifications as Qt signals.

    Signals
    -------
    error_reported(str, str)
        Exception class name and message of a reported backend failure
    modified_count_changed(int)
        Number of unsaved edits, after every change to the working set

    Parameters
    ----------
    reconciler : ResultEntryReconciler
        The reconciler to listen to
    parent : QObject, optional
        Qt parent
    """

    error_reported = pyqtSignal(str, str)
    modified_count_changed = pyqtSignal(int)

    def __init__(
        self, reconciler: ResultEntryReconciler, parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.reconciler = reconciler
        reconciler.add_error_listener(self._on_error)
        reconciler.add_change_listener(self._on_change)

    def detach(self):
        """Stop listening to the reconciler."""
        self.reconciler.remove_error_listener(self._on_error)
        self.reconciler.remove_change_listener(self._on_change)

    def _on_error(self, error: Exception):
        self.error_reported.emit(type(error).__name__, str(error))

    def _on_change(self, modified_count: int):
        logger.debug(f"Modified results: {modified_count}")
        self.modified_count_changed.emit(modified_count)
