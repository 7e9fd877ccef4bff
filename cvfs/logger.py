"""
CVFS Logger Module

Thin layer over the standard logging module. Every component logs
through a named ``Logger`` that attaches its subsystem name and a
``context`` dict of key/value details to each record. Handlers are
installed once on the ``cvfs`` logger:
- stderr console output (optional, coloured on a TTY)
- a log file (optional)
- an in-memory ring buffer that the shell and tests can query

Author: YSNRFD
Version: 1.0.0
"""

import logging
import sys
import threading
from collections import deque
from enum import IntEnum
from pathlib import Path
from typing import Optional, Any, List

ROOT_LOGGER = 'cvfs'


class LogLevel(IntEnum):
    """Log levels, numerically equal to the standard logging levels."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def from_name(cls, name: str) -> 'LogLevel':
        """Look up a level by name, ignoring case."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}") from None


class LogFormatter(logging.Formatter):
    """
    Formats records as:
        [2024-01-01 12:00:00.000] DEBUG    [vfs] Created file {name=a.txt ino=1}
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(datefmt='%Y-%m-%d %H:%M:%S')
        self.use_colors = use_colors and sys.stderr.isatty()

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        return f"{super().formatTime(record, datefmt)}.{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        level = f"{record.levelname:8s}"
        if self.use_colors and record.levelname in self.COLORS:
            level = f"{self.COLORS[record.levelname]}{level}{self.RESET}"

        parts = [f"[{self.formatTime(record, self.datefmt)}]", level]

        subsystem = getattr(record, 'subsystem', None)
        if subsystem:
            parts.append(f"[{subsystem}]")

        parts.append(record.getMessage())

        context = getattr(record, 'context', None)
        if context:
            parts.append("{" + " ".join(f"{k}={v}" for k, v in context.items()) + "}")

        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class LogBufferHandler(logging.Handler):
    """Ring buffer of the most recent records, stored as plain dicts."""

    def __init__(self, max_entries: int = 10000):
        super().__init__()
        self._entries: deque = deque(maxlen=max_entries)

    def emit(self, record: logging.LogRecord) -> None:
        entry = {
            'timestamp': record.created,
            'level': record.levelname,
            'subsystem': getattr(record, 'subsystem', None),
            'message': record.getMessage(),
            'context': dict(getattr(record, 'context', None) or {}),
        }
        with self.lock:
            self._entries.append(entry)

    def get_logs(
        self,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Most recent entries first filtered by level name and subsystem."""
        with self.lock:
            entries = list(self._entries)

        matches = [
            e for e in entries
            if (level is None or e['level'] == level.upper())
            and (subsystem is None or e['subsystem'] == subsystem)
        ]
        return matches[-limit:] if limit else matches

    def clear(self) -> None:
        with self.lock:
            self._entries.clear()


class Logger:
    """
    Per-subsystem logger.

    ``Logger('vfs')`` always returns the same object, backed by the
    standard ``cvfs.vfs`` logger. Nothing is printed until
    ``Logger.initialize`` installs handlers.

    Example:
        >>> log = Logger('vfs')
        >>> log.debug("Created file", context={'name': 'a.txt', 'ino': 1})
    """

    _instances: dict[str, 'Logger'] = {}
    _lock = threading.Lock()
    _initialized = False
    _buffer_handler: Optional[LogBufferHandler] = None

    def __new__(cls, subsystem: str = ROOT_LOGGER) -> 'Logger':
        with cls._lock:
            instance = cls._instances.get(subsystem)
            if instance is None:
                instance = super().__new__(cls)
                instance._subsystem = subsystem
                instance._logger = logging.getLogger(f'{ROOT_LOGGER}.{subsystem}')
                cls._instances[subsystem] = instance
            return instance

    @staticmethod
    def _attach(root: logging.Logger, handler: logging.Handler, level: int,
                formatter: Optional[logging.Formatter] = None) -> None:
        handler.setLevel(level)
        if formatter is not None:
            handler.setFormatter(formatter)
        root.addHandler(handler)

    @classmethod
    def initialize(
        cls,
        level: int = LogLevel.INFO,
        log_file: Optional[str] = None,
        console_output: bool = True,
        use_colors: bool = True
    ) -> None:
        """
        Install handlers on the ``cvfs`` logger.

        Calls after the first are ignored until ``shutdown``.

        Args:
            level: Minimum level for every handler
            log_file: Path of a log file to append to
            console_output: Also log to stderr
            use_colors: Colour the level name on a TTY
        """
        with cls._lock:
            if cls._initialized:
                return

            root = logging.getLogger(ROOT_LOGGER)
            root.setLevel(level)
            root.propagate = False

            cls._buffer_handler = LogBufferHandler()
            cls._attach(root, cls._buffer_handler, level)

            if console_output:
                cls._attach(root, logging.StreamHandler(sys.stderr), level,
                            LogFormatter(use_colors=use_colors))

            if log_file:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                cls._attach(root, logging.FileHandler(log_file, encoding='utf-8'), level,
                            LogFormatter(use_colors=False))

            cls._initialized = True

    @classmethod
    def shutdown(cls) -> None:
        """Close and remove every handler so ``initialize`` can run again."""
        with cls._lock:
            root = logging.getLogger(ROOT_LOGGER)
            for handler in list(root.handlers):
                root.removeHandler(handler)
                handler.close()
            cls._buffer_handler = None
            cls._initialized = False

    @classmethod
    def get_buffered_logs(
        cls,
        level: Optional[str] = None,
        subsystem: Optional[str] = None,
        limit: int = 100
    ) -> List[dict[str, Any]]:
        """Entries from the in-memory buffer; empty before ``initialize``."""
        if cls._buffer_handler is None:
            return []
        return cls._buffer_handler.get_logs(level=level, subsystem=subsystem, limit=limit)

    def _emit(self, level: int, message: str, context: Optional[dict[str, Any]],
              exc_info: Any = None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={'subsystem': self._subsystem, 'context': context or {}},
        )

    def debug(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._emit(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._emit(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._emit(LogLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._emit(LogLevel.ERROR, message, context)

    def critical(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        self._emit(LogLevel.CRITICAL, message, context)

    def exception(
        self,
        message: str,
        exc: Optional[BaseException] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        """Log at ERROR with the traceback of ``exc`` (or the one being handled)."""
        self._emit(LogLevel.ERROR, message, context, exc_info=exc if exc is not None else True)


def get_logger(subsystem: str) -> Logger:
    """Return the logger for ``subsystem`` (e.g. 'vfs', 'shell')."""
    return Logger(subsystem)
