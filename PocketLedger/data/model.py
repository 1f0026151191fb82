import enum
import logging
from typing import Any, List, Optional

from PySide6 import QtCore, QtGui

from ..core import engine
from ..core.expense import DATE_FORMAT
from ..settings import lib
from ..settings import locale
from ..ui.actions import signals

MonthKeyRole = QtCore.Qt.UserRole + 1


class Columns(enum.IntEnum):
    Date = 0
    Category = 1
    Amount = 2
    Description = 3


def _get_ledger(ledger=None):
    if ledger is not None:
        return ledger
    from ..core.ledger import ledger as default_ledger
    return default_ledger


class ExpenseModel(QtCore.QAbstractTableModel):
    """
    ExpenseModel renders the ledger's store as table rows.

    Rows map one-to-one to store positions; the model holds no copy of the
    expenses and resets whenever the expenses change.
    """

    def __init__(self, ledger=None, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self._ledger = ledger
        self._connect_signals()

    def _connect_signals(self) -> None:
        signals.expensesChanged.connect(self.reset_data)
        signals.configChanged.connect(self.on_config_changed)

    @property
    def ledger(self):
        return _get_ledger(self._ledger)

    @QtCore.Slot()
    def reset_data(self) -> None:
        self.beginResetModel()
        self.endResetModel()

    @QtCore.Slot(str)
    def on_config_changed(self, key: str) -> None:
        if key not in ('locale', 'currency'):
            return
        if self.rowCount() == 0:
            return
        self.dataChanged.emit(
            self.index(0, Columns.Amount.value),
            self.index(self.rowCount() - 1, Columns.Amount.value)
        )

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self.ledger.store)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(Columns)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole):
        """Returns data for the specified index and role.

        Args:
            index (QtCore.QModelIndex): The model index.
            role (int): The data role.

        Returns:
            Any: Data appropriate for the role, or None.
        """
        if not index.isValid():
            return None
        row = index.row()
        if row < 0 or row >= self.rowCount():
            return None

        expense = self.ledger.store[row]
        col = index.column()

        if role == MonthKeyRole:
            return expense.month_key

        if role == QtCore.Qt.EditRole:
            if col == Columns.Date.value:
                return expense.date.strftime(DATE_FORMAT)
            if col == Columns.Category.value:
                return expense.category
            if col == Columns.Amount.value:
                return expense.amount
            if col == Columns.Description.value:
                return expense.description
            return None

        if col == Columns.Date.value:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole):
                return expense.date.strftime(DATE_FORMAT)

        elif col == Columns.Category.value:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole):
                return expense.category

        elif col == Columns.Amount.value:
            if role == QtCore.Qt.DisplayRole:
                return f'{expense.amount:.2f}'
            elif role == QtCore.Qt.ToolTipRole:
                return locale.format_currency_value(
                    expense.amount, lib.settings.locale_name, lib.settings.currency
                )
            elif role == QtCore.Qt.TextAlignmentRole:
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter
            elif role == QtCore.Qt.ForegroundRole:
                if expense.amount < 0:
                    return QtGui.QColor('#c0392b')
                return None

        elif col == Columns.Description.value:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole):
                return expense.description

        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation,
                   role: int = QtCore.Qt.DisplayRole) -> Any:
        if role != QtCore.Qt.DisplayRole:
            return None
        if orientation == QtCore.Qt.Horizontal:
            if 0 <= section < self.columnCount():
                return Columns(section).name
        elif orientation == QtCore.Qt.Vertical:
            return f'{section + 1}'
        return None

    def flags(self, index: QtCore.QModelIndex) -> QtCore.Qt.ItemFlags:
        if not index.isValid():
            return QtCore.Qt.NoItemFlags
        return QtCore.Qt.ItemIsEnabled | QtCore.Qt.ItemIsSelectable


class ExpenseFilterProxyModel(QtCore.QSortFilterProxyModel):
    """Filters the expense rows by month and sorts on the raw values."""

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self._month: Optional[str] = None
        self.setSortRole(QtCore.Qt.EditRole)
        self.setDynamicSortFilter(True)

    def month(self) -> Optional[str]:
        return self._month

    @QtCore.Slot(str)
    def set_month(self, key: Optional[str]) -> None:
        """Show only the given ``YYYY-MM`` month. ``None`` or 'all' shows every row."""
        key = None if engine.is_all_months(key) else key.strip()
        if key == self._month:
            return
        logging.debug(f'Month filter set to "{engine.month_label(key)}"')
        self._month = key
        self.invalidateFilter()

    def filterAcceptsRow(self, source_row: int, source_parent: QtCore.QModelIndex) -> bool:
        if self._month is None:
            return True
        index = self.sourceModel().index(source_row, Columns.Date.value, source_parent)
        return index.data(MonthKeyRole) == self._month

    def source_rows(self, indexes: List[QtCore.QModelIndex]) -> List[int]:
        """Map proxy indexes to distinct store positions."""
        rows = {self.mapToSource(index).row() for index in indexes if index.isValid()}
        return sorted(rows)


class CategoryTotalsModel(QtCore.QAbstractTableModel):
    """Two-column model of category totals in the store's first-seen order."""

    def __init__(self, ledger=None, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self._ledger = ledger
        self._data = []
        self._connect_signals()
        self.init_data()

    def _connect_signals(self) -> None:
        signals.expensesChanged.connect(self.init_data)

    @QtCore.Slot()
    def init_data(self) -> None:
        self.beginResetModel()
        try:
            self._data = list(_get_ledger(self._ledger).store.category_totals().items())
        finally:
            self.endResetModel()

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._data)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return 2

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole):
        if not index.isValid() or not 0 <= index.row() < len(self._data):
            return None

        category, total = self._data[index.row()]
        if index.column() == 0:
            if role in (QtCore.Qt.DisplayRole, QtCore.Qt.EditRole):
                return category
        elif index.column() == 1:
            if role == QtCore.Qt.DisplayRole:
                return locale.format_currency_value(total, lib.settings.locale_name, lib.settings.currency)
            elif role == QtCore.Qt.EditRole:
                return total
            elif role == QtCore.Qt.TextAlignmentRole:
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter
        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation,
                   role: int = QtCore.Qt.DisplayRole) -> Any:
        if role != QtCore.Qt.DisplayRole or orientation != QtCore.Qt.Horizontal:
            return None
        return ('Category', 'Total')[section] if 0 <= section < 2 else None
