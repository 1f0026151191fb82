"""Dialog for entering a new expense."""
import datetime
from typing import Optional

from PySide6 import QtCore, QtWidgets

from ..core.expense import DATE_FORMAT, Expense
from ..settings import lib
from ..status import status


class AddExpenseDialog(QtWidgets.QDialog):
    """Form for a single expense.

    The dialog only closes when the entered values can be parsed. The
    resulting record is available from :meth:`expense`.
    """

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setWindowTitle('Add Expense')
        self.setModal(True)

        self.date_editor = None
        self.category_editor = None
        self.amount_editor = None
        self.description_editor = None
        self.error_label = None
        self.button_box = None

        self._expense: Optional[Expense] = None

        self._create_ui()
        self._connect_signals()

    def _create_ui(self) -> None:
        QtWidgets.QVBoxLayout(self)

        form = QtWidgets.QFormLayout()
        self.layout().addLayout(form)

        self.date_editor = QtWidgets.QLineEdit(parent=self)
        self.date_editor.setText(datetime.date.today().strftime(DATE_FORMAT))
        self.date_editor.setPlaceholderText('yyyy-mm-dd')
        form.addRow('Date (yyyy-mm-dd):', self.date_editor)

        self.category_editor = QtWidgets.QComboBox(parent=self)
        self.category_editor.setEditable(True)
        self.category_editor.addItems(lib.settings.categories)
        form.addRow('Category:', self.category_editor)

        self.amount_editor = QtWidgets.QLineEdit(parent=self)
        self.amount_editor.setPlaceholderText('0.00')
        form.addRow('Amount:', self.amount_editor)

        self.description_editor = QtWidgets.QPlainTextEdit(parent=self)
        self.description_editor.setTabChangesFocus(True)
        form.addRow('Description:', self.description_editor)

        self.error_label = QtWidgets.QLabel(parent=self)
        self.error_label.setObjectName('AddExpenseErrorLabel')
        self.error_label.setStyleSheet('color: #c0392b;')
        self.error_label.setWordWrap(True)
        self.error_label.hide()
        self.layout().addWidget(self.error_label)

        self.button_box = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Save | QtWidgets.QDialogButtonBox.Cancel,
            parent=self
        )
        self.layout().addWidget(self.button_box)

    def _connect_signals(self) -> None:
        self.button_box.accepted.connect(self.save)
        self.button_box.rejected.connect(self.reject)

    def set_values(self, date_text: str, category: str, amount_text: str, description: str = '') -> None:
        self.date_editor.setText(date_text)
        self.category_editor.setCurrentText(category)
        self.amount_editor.setText(amount_text)
        self.description_editor.setPlainText(description)

    @QtCore.Slot()
    def save(self) -> None:
        """Validate the form and accept the dialog, or show the validation error."""
        try:
            self._expense = Expense.from_input(
                self.date_editor.text(),
                self.category_editor.currentText(),
                self.amount_editor.text(),
                self.description_editor.toPlainText()
            )
        except status.ValidationException as ex:
            self._expense = None
            self.error_label.setText(ex.message or ex.status_message)
            self.error_label.show()
            return

        self.error_label.hide()
        self.accept()

    def expense(self) -> Optional[Expense]:
        return self._expense
