"""
PocketLedger: desktop application for recording and summarizing personal expenses.

This package provides:

- :mod:`PocketLedger.core` – Expense records, the in-memory store, the CSV codec, the month filter and the ledger service.
- :mod:`PocketLedger.data` – pandas summaries (:func:`PocketLedger.data.data.get_monthly_totals`) and Qt table models for the expenses and category totals.
- :mod:`PocketLedger.ui` – A PySide6 main window with the add, export and delete actions.
- :mod:`PocketLedger.settings` – Settings management with schema validation and locale-aware currency formatting.
- :mod:`PocketLedger.log` – In-app logging with a log viewer.

Use :func:`PocketLedger.exec_` to launch the application.
"""

import sys

from PySide6 import QtCore

# Fail on Python < 3.11
if not (sys.version_info.major == 3 and sys.version_info.minor >= 11):
    raise RuntimeError('PocketLedger requires Python 3.11 or higher.')

__version__ = '0.1.0'
__license__ = 'GPL-3.0'
__description__ = 'PocketLedger: desktop application for recording and summarizing personal expenses.'

from .log import log

log.setup_logging()


def exec_() -> None:
    """Launch the PocketLedger GUI application and enter its event loop.

    Initializes the QApplication, applies the command line options, shows the
    main window and starts the Qt event loop.
    """
    from .ui import app
    from .ui import main
    from .ui.actions import signals
    app = app.Application(sys.argv)
    main.show()

    # Ask components to load their data
    QtCore.QTimer.singleShot(100, signals.initializationRequested)

    sys.exit(app.exec())


if __name__ == '__main__':
    exec_()
