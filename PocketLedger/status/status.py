"""Status definitions and exceptions for PocketLedger.

This module provides:
    - Status: enumeration of possible application states
    - STATUS_MESSAGE: user-facing messages for each status
    - get_message: retrieve the message for a status
    - BaseStatusException: base exception carrying a Status
    - Specific exceptions (e.g., ParseException) raised by the core and settings
"""
import enum
import logging
from typing import Dict, Optional


class Status(enum.StrEnum):
    """Enumeration of application status codes."""
    UnknownStatus = enum.auto()
    Okay = enum.auto()

    # Config status
    SettingsNotFound = enum.auto()
    SettingsInvalid = enum.auto()

    # User input status
    ValidationFailed = enum.auto()

    # Ledger file status
    ParseFailed = enum.auto()
    StorageFailed = enum.auto()


STATUS_MESSAGE: Dict[Status, str] = {
    Status.UnknownStatus: 'Unknown status.',
    Status.Okay: 'Everything is okay.',

    Status.SettingsNotFound: 'Could not find the settings file.',
    Status.SettingsInvalid: 'The settings file seems to be incomplete, or contains invalid values.',

    Status.ValidationFailed: 'The expense could not be created.',

    Status.ParseFailed: 'The expenses file contains a line that could not be read.',
    Status.StorageFailed: 'The expenses file could not be read or written.',
}


def get_message(status: Status) -> str:
    """
    Get the message for a given status.

    Args:
        status (Status): The status enum.

    Returns:
        str: The message associated with the status.
    """
    return STATUS_MESSAGE.get(status, 'Unknown status')


class BaseStatusException(Exception):
    """Base exception for status-based errors in PocketLedger.

    Attributes:
        status (Status): Status code associated with this error.
        status_message (str): User-facing message for the status.
        report (bool): Log at ERROR and emit ``signals.error``. When False the
            error is logged at DEBUG only, for errors the caller recovers from.

    Args:
        message (str): Optional additional context for the error.
    """
    status = Status.UnknownStatus
    report = True

    def __init__(self, message: str = None):
        self.status_message = get_message(self.status)
        self.message = message
        exception_message = f'{self.status_message} {message}' if message else self.status_message
        super().__init__(exception_message)

        if not self.report:
            logging.debug(exception_message)
            return

        logging.error(exception_message)

        from ..ui.actions import signals
        signals.error.emit(message or self.status_message)


class UnknownException(BaseStatusException):
    """Exception for an unknown error during status processing."""
    pass


class SettingsNotFoundException(BaseStatusException):
    """Exception raised when the settings file cannot be found."""
    status = Status.SettingsNotFound


class SettingsInvalidException(BaseStatusException):
    """Exception raised when the settings file is invalid or malformed."""
    status = Status.SettingsInvalid


class ValidationException(BaseStatusException, ValueError):
    """Exception raised when user supplied expense fields cannot be parsed.

    The store is never mutated when this is raised; callers are expected to
    re-prompt the user.
    """
    status = Status.ValidationFailed
    report = False


class ParseException(BaseStatusException, ValueError):
    """Exception raised when a persisted expense line cannot be parsed.

    Attributes:
        line_number (int): 1-based line number of the offending line.
        store (ExpenseStore): Records parsed before the offending line.
    """
    status = Status.ParseFailed

    def __init__(self, message: str = None, line_number: Optional[int] = None, store=None):
        self.line_number = line_number
        self.store = store
        super().__init__(message)


class StorageException(BaseStatusException, OSError):
    """Exception raised when the expenses file cannot be read or written."""
    status = Status.StorageFailed
