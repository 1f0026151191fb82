"""Application-wide Qt signals and utility slots for PocketLedger.

This module provides:
    - add_expense slot: shows the add dialog and stores the new expense.
    - remove_expenses slot: confirms and removes expenses by store position.
    - export_expenses slot: asks for a file name and exports the expenses.
    - Signals: custom Qt signals for data changes, filtering, configuration and UI actions.
"""
import logging
from typing import List

from PySide6 import QtCore, QtWidgets


@QtCore.Slot()
def add_expense() -> None:
    """Open the add-expense dialog and add the accepted expense to the ledger."""
    from ..core.ledger import ledger
    from .dialog import AddExpenseDialog

    dialog = AddExpenseDialog(parent=QtWidgets.QApplication.activeWindow())
    if dialog.exec() != QtWidgets.QDialog.Accepted:
        return

    expense = dialog.expense()
    if expense is None:
        return
    ledger.add(expense)


@QtCore.Slot(list)
def remove_expenses(rows: List[int]) -> None:
    """Ask for confirmation and remove the expenses at the given store positions."""
    from ..core.ledger import ledger

    parent = QtWidgets.QApplication.activeWindow()
    if not rows:
        QtWidgets.QMessageBox.information(parent, 'Info', 'No rows selected')
        return

    res = QtWidgets.QMessageBox.question(
        parent,
        'Confirm',
        'Delete selected expenses?',
        QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
    )
    if res != QtWidgets.QMessageBox.Yes:
        return

    try:
        ledger.remove_rows(rows)
    except IndexError as ex:
        logging.error(f'Could not remove expenses: {ex}')
        raise


@QtCore.Slot()
def export_expenses() -> None:
    """Ask for a file name and export the expenses to it."""
    from ..core.ledger import ledger
    from ..status import status

    parent = QtWidgets.QApplication.activeWindow()
    path, _ = QtWidgets.QFileDialog.getSaveFileName(
        parent,
        'Export Expenses to CSV',
        'expenses_export.csv',
        'CSV files (*.csv);;All files (*)'
    )
    if not path:
        return

    try:
        ledger.export(path)
    except status.StorageException as ex:
        QtWidgets.QMessageBox.critical(parent, 'Error', f'Export failed: {ex}')
        return

    QtWidgets.QMessageBox.information(parent, 'Done', 'Exported successfully.')


class Signals(QtCore.QObject):
    """Centralized Qt signals for application config, data, and UI events."""
    initializationRequested = QtCore.Signal()

    configChanged = QtCore.Signal(str)

    expensesChanged = QtCore.Signal()
    monthFilterChanged = QtCore.Signal(str)

    addExpenseRequested = QtCore.Signal()
    removeExpensesRequested = QtCore.Signal(list)
    exportRequested = QtCore.Signal()

    showLogs = QtCore.Signal()

    error = QtCore.Signal(str)

    def __init__(self):
        super().__init__()
        self._connect_signals()

    def _connect_signals(self):
        self.addExpenseRequested.connect(add_expense)
        self.removeExpensesRequested.connect(remove_expenses)
        self.exportRequested.connect(export_expenses)

        @QtCore.Slot()
        def _on_initialization_requested() -> None:
            from ..core.ledger import ledger
            ledger.load()

        self.initializationRequested.connect(_on_initialization_requested)


signals = Signals()
