"""Test suite for PocketLedger.

Run with:
    python -m unittest discover -s tests -t .
"""
import os

# Headless Qt, and keep the user's app data directory out of the tests.
# Both must be in place before PocketLedger creates its settings singleton.
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from PySide6 import QtCore

QtCore.QStandardPaths.setTestModeEnabled(True)
