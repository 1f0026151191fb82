"""Unittest base class for creating a clean test environment."""
import datetime
import logging
import os
import shutil
import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Optional

from PySide6 import QtWidgets, QtCore

from PocketLedger.core import ledger
from PocketLedger.core.expense import Expense
from PocketLedger.settings import lib


@contextmanager
def mute_ui_signals():
    from PocketLedger.ui.actions import signals
    blocker = QtCore.QSignalBlocker(signals)  # blocks every signal in `signals`
    try:
        yield
    finally:
        del blocker


def make_expense(date: str, category: str, amount: float, description: str = '') -> Expense:
    """Shorthand for an :class:`Expense` with an ISO date string."""
    return Expense(
        date=datetime.date.fromisoformat(date),
        category=category,
        amount=amount,
        description=description
    )


def write_lines(path: Path, lines: Iterable[str]) -> None:
    with path.open('w', encoding='utf-8', newline='') as f:
        for line in lines:
            f.write(line)
            f.write('\n')


def read_lines(path: Path):
    with path.open('r', encoding='utf-8', newline='') as f:
        return f.read().split('\n')[:-1]


class BaseTestCase(unittest.TestCase):
    """Base test case running in a temporary working directory with fresh settings and ledger."""

    tmp_dir: Path
    csv_path: Path
    _cwd: Optional[str]

    def setUp(self) -> None:
        """Set up a temporary directory and reinitialize all APIs."""
        if 'QT_QPA_PLATFORM' not in os.environ:
            os.environ['QT_QPA_PLATFORM'] = 'offscreen'
            logging.debug('QT_QPA_PLATFORM set to offscreen for headless testing.')

        # Ensure a QApplication is available
        if not QtWidgets.QApplication.instance():
            QtWidgets.QApplication([])  # type: ignore
            logging.debug('QtWidgets.QApplication initialized for tests.')

        self.tmp_dir = Path(tempfile.mkdtemp(prefix='pocketledger_test_'))
        logging.debug(f'Created test directory at {self.tmp_dir}')

        self._cwd = os.getcwd()
        os.chdir(self.tmp_dir)

        # Reinitialize settings API
        lib.settings = lib.SettingsAPI(settings_path=str(self.tmp_dir / 'config' / 'settings.json'))
        logging.debug('SettingsAPI reinitialized.')

        # Reinitialize ledger API
        self.csv_path = self.tmp_dir / 'expenses.csv'
        ledger.ledger = ledger.LedgerAPI(path=self.csv_path)
        logging.debug('LedgerAPI reinitialized.')

    def tearDown(self) -> None:
        """Restore the working directory and remove the test directory."""
        if QtWidgets.QApplication.instance():
            QtWidgets.QApplication.instance().quit()

        if self._cwd:
            os.chdir(self._cwd)

        if self.tmp_dir.is_dir():
            shutil.rmtree(self.tmp_dir, ignore_errors=True)
            logging.debug(f'Removed test directory {self.tmp_dir}')
