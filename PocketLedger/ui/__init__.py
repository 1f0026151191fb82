"""
UI package: application actions, main application setup and widgets.

This package provides:

- :mod:`PocketLedger.ui.actions` – Application-wide Qt signals and utility slots.
- :mod:`PocketLedger.ui.app` – QApplication subclass.
- :mod:`PocketLedger.ui.dialog` – Dialog for entering a new expense.
- :mod:`PocketLedger.ui.main` – Main window composition and UI components.
"""
