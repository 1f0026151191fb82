"""
Session owner of the expense store and its CSV file.

The :class:`LedgerAPI` loads the persisted file on request, applies
mutations to the in-memory store and rewrites the whole file after each one.
A failed rewrite is logged and reported but the in-memory change is kept,
so the session can continue with data ahead of the disk.
"""

import logging
import pathlib
from typing import Iterable, List, Optional, Union

from PySide6 import QtCore

from . import codec
from . import engine
from .expense import Expense
from .store import ExpenseStore
from ..settings import lib
from ..status import status
from ..ui.actions import signals


class LedgerAPI(QtCore.QObject):
    """Owns the session's :class:`ExpenseStore` and keeps the CSV file in sync."""

    def __init__(self, path: Optional[Union[str, pathlib.Path]] = None,
                 parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self._follow_settings = path is None
        self.path: pathlib.Path = pathlib.Path(path) if path else lib.settings.csv_path
        self.store: ExpenseStore = ExpenseStore()
        self._connect_signals()

    def _connect_signals(self) -> None:
        signals.configChanged.connect(self.on_config_changed)

    @QtCore.Slot(str)
    def on_config_changed(self, key: str) -> None:
        """Switch to a new file when the ``csv_path`` setting changes."""
        if key != 'csv_path' or not self._follow_settings:
            return
        new_path = lib.settings.csv_path
        if new_path == self.path:
            return
        logging.info(f'Expenses file changed to "{new_path}"')
        self.path = new_path
        self.load()

    def load(self) -> bool:
        """Replace the store contents with the contents of the CSV file.

        Loading stops at the first malformed line. Records read before it
        are kept.

        Returns:
            bool: True if the whole file was read, False otherwise.
        """
        ok = True
        try:
            self.store = codec.load(self.path)
        except status.ParseException as e:
            logging.error(f'Stopped loading "{self.path}" at line {e.line_number}.')
            self.store = e.store if e.store is not None else ExpenseStore()
            ok = False
        except status.StorageException:
            self.store = ExpenseStore()
            ok = False

        logging.info(f'Loaded {len(self.store)} expenses from "{self.path}"')
        signals.expensesChanged.emit()
        return ok

    def save(self) -> bool:
        """Rewrite the CSV file from the current store.

        Returns:
            bool: True on success. On failure the error is logged and reported
            and the in-memory store is left untouched.
        """
        try:
            codec.save(self.store, self.path)
        except status.StorageException as e:
            logging.warning(f'In-memory expenses are ahead of "{self.path}": {e}')
            return False
        return True

    def export(self, path: Union[str, pathlib.Path]) -> None:
        """Export the store to ``path`` using quoted CSV fields.

        Raises:
            status.StorageException: If the file cannot be written.
        """
        codec.export(self.store, path)

    def add(self, expense: Expense) -> bool:
        """Insert an expense at the head of the store and persist.

        Returns:
            bool: The result of :meth:`save`.
        """
        self.store.add(expense)
        logging.debug(f'Added expense: {expense}')
        signals.expensesChanged.emit()
        return self.save()

    def remove_at(self, index: int) -> Expense:
        """Remove the expense at ``index`` and persist.

        Raises:
            IndexError: If ``index`` is out of range. Nothing is changed.
        """
        expense = self.store.remove_at(index)
        logging.debug(f'Removed expense at {index}: {expense}')
        signals.expensesChanged.emit()
        self.save()
        return expense

    def remove_rows(self, indices: Iterable[int]) -> List[Expense]:
        """Remove several expenses by position and persist once.

        Positions refer to the store before any removal.

        Raises:
            IndexError: If any index is out of range. Nothing is changed.
        """
        rows = sorted(set(indices), reverse=True)
        for row in rows:
            if not isinstance(row, int) or not 0 <= row < len(self.store):
                raise IndexError(f'Expense index {row} out of range [0, {len(self.store)})')
        if not rows:
            return []

        removed = [self.store.remove_at(row) for row in rows]
        logging.debug(f'Removed {len(removed)} expenses.')
        signals.expensesChanged.emit()
        self.save()
        return removed

    def expenses(self):
        return self.store.expenses()

    def filter_by_month(self, key: Optional[str] = None) -> List[Expense]:
        return engine.filter_by_month(self.store, key)

    def total(self, key: Optional[str] = None) -> float:
        """Total amount of the expenses in the given month, or of all expenses."""
        return engine.total(self.filter_by_month(key))


ledger: LedgerAPI = LedgerAPI()
