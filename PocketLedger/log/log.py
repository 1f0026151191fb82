"""Application logging.

All modules log through the root logger. :func:`setup_logging` attaches a
stdout handler and a :class:`TankHandler` that keeps the recent records in
memory for the log viewer. Qt's own messages are routed into the same
logger by :func:`qt_message_handler`.
"""
import collections
import logging
import sys

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

from ..ui.actions import signals

LOG_LEVEL = logging.DEBUG
LOG_FORMAT = '[%(asctime)s] <%(module)s> %(levelname)s:  %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}

TANK_SIZE = 5000


def parse_level(name):
    """
    Converts a level name, as given on the command line, to a logging level.

    Args:
        name (str): Case-insensitive level name, e.g. 'info'.

    Returns:
        int: The logging level.

    Raises:
        ValueError: If the name is not one of :data:`LOG_LEVELS`.
    """
    key = f'{name}'.strip().upper()
    if key not in LOG_LEVELS:
        raise ValueError(f'Unknown log level "{name}", use one of {", ".join(LOG_LEVELS)}.')
    return LOG_LEVELS[key]


def set_logging_level(level):
    """
    Applies a level to the root logger and every handler attached to it.

    Args:
        level (int): One of the standard logging levels.

    Raises:
        ValueError: If ``level`` is not an int or not a standard level.
    """
    if not isinstance(level, int):
        raise ValueError('Logging level must be an integer.')
    if level not in LOG_LEVELS.values():
        raise ValueError('Invalid logging level. Use one of the standard logging levels, e.g., logging.DEBUG.')

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def qt_message_handler(mode, context, message):
    """
    Forwards a Qt message to the 'Qt' logger. A fatal message exits the application.
    """
    logger = logging.getLogger('Qt')
    message = message.strip()

    if mode == QtMsgType.QtDebugMsg:
        logger.debug(message)
    elif mode == QtMsgType.QtInfoMsg:
        logger.info(message)
    elif mode == QtMsgType.QtWarningMsg:
        logger.warning(message)
    elif mode == QtMsgType.QtCriticalMsg:
        logger.error(message)
    elif mode == QtMsgType.QtFatalMsg:
        logger.critical(message)
        sys.exit(1)


def setup_logging(enable_stream_handler=True, enable_qt_handler=True, log_level=LOG_LEVEL):
    """
    Replaces the root logger's handlers with the application handlers.

    Args:
        enable_stream_handler (bool): Also log to stdout.
        enable_qt_handler (bool): Route Qt messages through Python logging.
        log_level (int): Level applied to the root logger and all handlers.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    handlers = [TankHandler()]
    if enable_stream_handler:
        handlers.insert(0, logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    if enable_qt_handler:
        qInstallMessageHandler(qt_message_handler)


def get_tank_handler():
    """Returns the TankHandler installed on the root logger, or None."""
    return next(
        (h for h in logging.getLogger().handlers if isinstance(h, TankHandler)),
        None
    )


class TankHandler(logging.Handler):
    """
    Keeps the most recent formatted records in memory for the log viewer.

    Attributes:
        tank (collections.deque[tuple[int, str]]): ``(level, message)`` pairs, oldest first.
            Only the last ``maxlen`` records are kept.
    """

    def __init__(self, maxlen=TANK_SIZE):
        super().__init__()
        self.tank = collections.deque(maxlen=maxlen)

    def emit(self, record):
        try:
            message = self.format(record)
            self.tank.append((record.levelno, message))
            # Ask the main window to surface the logs
            if record.levelno >= logging.ERROR:
                signals.showLogs.emit()
        except (Exception, KeyboardInterrupt):
            self.handleError(record)

    def get_logs(self, level=logging.NOTSET):
        """
        Returns the stored messages at or above ``level``, oldest first.

        Args:
            level (int, optional): Minimum logging level. Defaults to logging.NOTSET.

        Returns:
            list[str]: The formatted messages.
        """
        return [msg for lvl, msg in self.tank if lvl >= level]

    def clear_logs(self):
        self.tank.clear()
