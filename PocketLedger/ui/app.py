"""Application setup utilities and custom QApplication for PocketLedger.

This module provides:
    - set_model_id: set Windows AppUserModelID for custom window icons on Windows
    - parse_arguments: read the command line options understood by the application
    - Application: subclass of QApplication configuring application metadata
"""
import ctypes
import logging
import sys
import uuid
from typing import Optional, Sequence

from PySide6 import QtCore, QtWidgets

from .. import __version__


def set_model_id() -> None:
    """Set windows model id to add custom window icons on windows.
    https://github.com/cztomczak/cefpython/issues/395
    """
    if QtCore.QSysInfo().productType() in ('windows', 'winrt'):
        hresult = ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(
            f'PocketLedger-{uuid.uuid4()}'.encode('utf-8')
        )
        if hresult != 0:
            raise RuntimeError(f'SetCurrentProcessExplicitAppUserModelID failed with code {hresult}')


def parse_arguments(app: QtCore.QCoreApplication) -> QtCore.QCommandLineParser:
    """Process the command line options of the application.

    Options:
        --file PATH: expenses file to open instead of the configured one.
        --log-level LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL.
    """
    parser = QtCore.QCommandLineParser()
    parser.setApplicationDescription('Record, filter and total personal expenses stored in a CSV file.')
    parser.addHelpOption()
    parser.addVersionOption()

    parser.addOption(QtCore.QCommandLineOption(
        ['f', 'file'], 'Expenses CSV file to open.', 'path'
    ))
    parser.addOption(QtCore.QCommandLineOption(
        ['log-level'], 'Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).', 'level', 'DEBUG'
    ))

    parser.process(app)
    return parser


class Application(QtWidgets.QApplication):
    """Custom QApplication setting the application metadata and Windows model ID."""

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        if argv is None:
            argv = sys.argv

        super().__init__(list(argv))

        from ..settings import lib
        self.setApplicationName(lib.app_name)
        self.setOrganizationName('')
        self.setApplicationVersion(__version__)
        self.setQuitOnLastWindowClosed(True)

        set_model_id()

        self.parser = parse_arguments(self)
        self._apply_arguments()

    def _apply_arguments(self) -> None:
        from ..log import log

        try:
            log.set_logging_level(log.parse_level(self.parser.value('log-level')))
        except ValueError as e:
            logging.warning(f'{e} Keeping the default level.')

        if self.parser.isSet('file'):
            from ..core import ledger
            path = self.parser.value('file')
            logging.info(f'Using expenses file from the command line: "{path}"')
            ledger.ledger = ledger.LedgerAPI(path=path)
