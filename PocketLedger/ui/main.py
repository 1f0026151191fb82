"""Main window composition and UI entry points for PocketLedger.

This module defines:
    - show(): initialize and display the main window
    - MonthFilterComboBox: month selector populated from the ledger
    - ExpenseView: table view of the expenses
    - SummaryWidget: total, category totals, monthly totals and category by month panel
    - LogDialog: read-only view of the in-memory logs
    - MainWindow: composition of the above with the add/export/delete actions

The widgets hold no expense data of their own: everything is read back from
the ledger whenever ``signals.expensesChanged`` is emitted.
"""
import logging
from typing import List, Optional

from PySide6 import QtWidgets, QtCore, QtGui

from ..core import engine
from ..data import data
from ..data.model import CategoryTotalsModel, Columns, ExpenseFilterProxyModel, ExpenseModel
from ..log import log
from ..settings import lib
from ..settings import locale
from ..ui.actions import signals

widget = None


def show():
    global widget

    if widget is None:
        widget = MainWindow()

    widget.show()


def _get_ledger(ledger=None):
    if ledger is not None:
        return ledger
    from ..core.ledger import ledger as default_ledger
    return default_ledger


class MonthFilterComboBox(QtWidgets.QComboBox):
    """Combo box listing 'All months' followed by the ledger's months, newest first."""

    def __init__(self, ledger=None, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self._ledger = ledger
        self.setSizeAdjustPolicy(QtWidgets.QComboBox.AdjustToContents)

        self._connect_signals()
        self.init_data()

    def _connect_signals(self) -> None:
        signals.expensesChanged.connect(self.init_data)
        self.currentIndexChanged.connect(self.emit_month_changed)

    @QtCore.Slot()
    def init_data(self) -> None:
        """Repopulate the months, keeping the current selection when it still exists."""
        current = self.current_month()

        self.blockSignals(True)
        try:
            self.clear()
            self.addItem(engine.ALL_MONTHS_LABEL, userData=None)
            for month in _get_ledger(self._ledger).store.distinct_months():
                self.addItem(month, userData=month)

            idx = self.findData(current) if current else 0
            self.setCurrentIndex(max(idx, 0))
        finally:
            self.blockSignals(False)

        if self.current_month() != current:
            self.emit_month_changed()

    def current_month(self) -> Optional[str]:
        return self.currentData()

    def emit_month_changed(self, *args) -> None:
        signals.monthFilterChanged.emit(self.current_month() or engine.ALL_MONTHS)


class ExpenseView(QtWidgets.QTableView):
    """Table view for displaying and selecting expenses."""

    def __init__(self, ledger=None, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)

        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.setSelectionMode(QtWidgets.QAbstractItemView.ExtendedSelection)
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.setShowGrid(False)
        self.setWordWrap(False)
        self.verticalHeader().setDefaultSectionSize(30)

        self._init_model(ledger)
        self._connect_signals()

    def _init_model(self, ledger) -> None:
        model = ExpenseModel(ledger=ledger, parent=self)
        proxy = ExpenseFilterProxyModel(self)
        proxy.setSourceModel(model)
        self.setModel(proxy)

        header = self.horizontalHeader()
        header.setSectionResizeMode(Columns.Date.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Category.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Amount.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Description.value, QtWidgets.QHeaderView.Stretch)

        self.setSortingEnabled(True)
        # Unsorted until a header is clicked, so rows follow the store order
        header.setSortIndicator(-1, QtCore.Qt.AscendingOrder)

    def _connect_signals(self) -> None:
        signals.monthFilterChanged.connect(self.model().set_month)

    def selected_rows(self) -> List[int]:
        """Store positions of the selected rows."""
        return self.model().source_rows(self.selectionModel().selectedRows())


class SummaryWidget(QtWidgets.QWidget):
    """Shows the total of the selected month, the category totals and the monthly totals."""

    def __init__(self, ledger=None, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self._ledger = ledger
        self._month: Optional[str] = None

        self.month_label = None
        self.total_label = None
        self.category_view = None
        self.monthly_view = None
        self.category_month_view = None

        self.setMinimumWidth(260)

        self._create_ui()
        self._connect_signals()
        self.init_data()

    def _create_ui(self) -> None:
        QtWidgets.QVBoxLayout(self)
        self.layout().setContentsMargins(12, 12, 12, 12)

        self.month_label = QtWidgets.QLabel(parent=self)
        font = self.month_label.font()
        font.setBold(True)
        self.month_label.setFont(font)
        self.layout().addWidget(self.month_label)

        self.total_label = QtWidgets.QLabel(parent=self)
        font = self.total_label.font()
        font.setBold(True)
        font.setPointSizeF(font.pointSizeF() * 1.6)
        self.total_label.setFont(font)
        self.layout().addWidget(self.total_label)

        self.layout().addWidget(QtWidgets.QLabel('Category Totals', parent=self))
        self.category_view = QtWidgets.QTableView(parent=self)
        self.category_view.setModel(CategoryTotalsModel(ledger=self._ledger, parent=self))
        self.category_view.verticalHeader().hide()
        self.category_view.horizontalHeader().setStretchLastSection(True)
        self.category_view.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.layout().addWidget(self.category_view, 1)

        self.layout().addWidget(QtWidgets.QLabel('Monthly Totals', parent=self))
        self.monthly_view = QtWidgets.QTreeWidget(parent=self)
        self.monthly_view.setRootIsDecorated(False)
        self.monthly_view.setHeaderLabels(['Month', 'Total', 'Expenses'])
        self.layout().addWidget(self.monthly_view, 1)

        self.layout().addWidget(QtWidgets.QLabel('Categories by Month', parent=self))
        self.category_month_view = QtWidgets.QTableWidget(parent=self)
        self.category_month_view.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.category_month_view.setSelectionMode(QtWidgets.QAbstractItemView.NoSelection)
        self.layout().addWidget(self.category_month_view, 1)

    def _connect_signals(self) -> None:
        signals.expensesChanged.connect(self.init_data)
        signals.monthFilterChanged.connect(self.set_month)

        @QtCore.Slot(str)
        def config_changed(key: str) -> None:
            if key in ('locale', 'currency'):
                self.init_data()

        signals.configChanged.connect(config_changed)

    @QtCore.Slot(str)
    def set_month(self, key: str) -> None:
        self._month = None if engine.is_all_months(key) else key
        self.update_total()

    @QtCore.Slot()
    def init_data(self) -> None:
        self.update_total()
        self.update_monthly_totals()
        self.update_category_month_totals()

    def format_value(self, value: float) -> str:
        return locale.format_currency_value(value, lib.settings.locale_name, lib.settings.currency)

    def update_total(self) -> None:
        ledger = _get_ledger(self._ledger)
        self.month_label.setText(f'Showing: {engine.month_label(self._month)}')
        self.total_label.setText(f'Total: {self.format_value(ledger.total(self._month))}')

    def update_monthly_totals(self) -> None:
        ledger = _get_ledger(self._ledger)
        df = data.get_monthly_totals(ledger.expenses())

        self.monthly_view.clear()
        for row in df.itertuples(index=False):
            item = QtWidgets.QTreeWidgetItem([row.month, self.format_value(row.total), f'{row.transactions}'])
            item.setTextAlignment(1, QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
            self.monthly_view.addTopLevelItem(item)

    def update_category_month_totals(self) -> None:
        """Fill the category by month table, newest month first."""
        ledger = _get_ledger(self._ledger)
        df = data.get_category_month_totals(ledger.expenses())

        view = self.category_month_view
        view.clear()
        view.setRowCount(len(df.index))
        view.setColumnCount(len(df.columns))
        view.setHorizontalHeaderLabels([f'{c}' for c in df.columns])
        view.setVerticalHeaderLabels([f'{c}' for c in df.index])

        for row, category in enumerate(df.index):
            for column, month in enumerate(df.columns):
                item = QtWidgets.QTableWidgetItem(self.format_value(float(df.at[category, month])))
                item.setTextAlignment(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
                view.setItem(row, column, item)


class LogDialog(QtWidgets.QDialog):
    """Read-only view of the messages stored by the log tank."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setWindowTitle('Logs')
        self.resize(720, 360)

        QtWidgets.QVBoxLayout(self)
        self.editor = QtWidgets.QPlainTextEdit(parent=self)
        self.editor.setReadOnly(True)
        self.editor.setLineWrapMode(QtWidgets.QPlainTextEdit.NoWrap)
        self.layout().addWidget(self.editor)

        self.init_data()

    @QtCore.Slot()
    def init_data(self) -> None:
        tank = log.get_tank_handler()
        self.editor.setPlainText('\n'.join(tank.get_logs(logging.INFO)) if tank else '')
        self.editor.moveCursor(QtGui.QTextCursor.End)


class MainWindow(QtWidgets.QMainWindow):
    """Expense table with a summary panel, a month filter and the add/export/delete actions."""

    def __init__(self, ledger=None, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self._ledger = ledger

        self.setWindowTitle(lib.app_name)
        self.resize(900, 600)

        self.expense_view = None
        self.summary_widget = None
        self.month_filter = None
        self.log_dialog = None

        self._create_ui()
        self._init_actions()
        self._connect_signals()

    def _create_ui(self) -> None:
        central = QtWidgets.QWidget(parent=self)
        QtWidgets.QVBoxLayout(central)
        central.layout().setContentsMargins(12, 12, 12, 12)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Horizontal, parent=central)
        self.expense_view = ExpenseView(ledger=self._ledger, parent=splitter)
        self.summary_widget = SummaryWidget(ledger=self._ledger, parent=splitter)
        splitter.addWidget(self.expense_view)
        splitter.addWidget(self.summary_widget)
        splitter.setStretchFactor(0, 1)
        central.layout().addWidget(splitter, 1)

        row = QtWidgets.QHBoxLayout()
        row.addWidget(QtWidgets.QLabel('Filter:', parent=central))
        self.month_filter = MonthFilterComboBox(ledger=self._ledger, parent=central)
        row.addWidget(self.month_filter)
        row.addStretch(1)
        central.layout().addLayout(row)

        self.setCentralWidget(central)
        self.setStatusBar(QtWidgets.QStatusBar(parent=self))

    def _init_actions(self) -> None:
        toolbar = self.addToolBar('Actions')
        toolbar.setObjectName('PocketLedgerToolbar')
        toolbar.setMovable(False)

        action = QtGui.QAction('+ Add Expense', self)
        action.setShortcut(QtGui.QKeySequence.New)
        action.triggered.connect(signals.addExpenseRequested)
        toolbar.addAction(action)

        action = QtGui.QAction('Export CSV', self)
        action.setShortcut('Ctrl+E')
        action.triggered.connect(signals.exportRequested)
        toolbar.addAction(action)

        action = QtGui.QAction('Delete Selected', self)
        action.setShortcut(QtGui.QKeySequence.Delete)
        action.triggered.connect(self.delete_selected)
        toolbar.addAction(action)

        toolbar.addSeparator()

        action = QtGui.QAction('Show Logs', self)
        action.triggered.connect(self.show_logs)
        toolbar.addAction(action)

    def _connect_signals(self) -> None:
        @QtCore.Slot(str)
        def on_error(message: str) -> None:
            self.statusBar().showMessage(message, 8000)

        signals.error.connect(on_error)
        signals.showLogs.connect(self.show_logs)

    @QtCore.Slot()
    def delete_selected(self) -> None:
        signals.removeExpensesRequested.emit(self.expense_view.selected_rows())

    @QtCore.Slot()
    def show_logs(self) -> None:
        if self.log_dialog is None:
            self.log_dialog = LogDialog(parent=self)
        self.log_dialog.init_data()
        self.log_dialog.show()
        self.log_dialog.raise_()
