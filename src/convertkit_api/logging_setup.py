"""
ConvertKit API - Debug Log Configuration

This module provides the per-client debug log. A client constructed with
``debug=True`` owns one ``DebugLogger``, which writes to a log file (``logs/debug.log``
under the working directory unless a custom location is configured). Clients with
debugging disabled never construct a ``DebugLogger`` and perform no logging I/O.

Every message passes through ``mask_message`` before a ``LogEntry`` is built, so the
file never receives a raw credential or email address, including messages composed
internally for diagnostics.

Lines follow the channel format used by the other ConvertKit SDKs:

    [2024-05-01T10:00:00.000000+00:00] ck-debug.INFO: GET account

Each ``DebugLogger`` owns an isolated, non-propagating ``logging.Logger`` so lines from
one client never reach another client's file or the application's root handlers.

Public Exports:
- DebugLogger: masked, file-backed debug logger
- DebugLogFormatter: formatter producing the channel line format
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Set, Union

from .constants import DEBUG_LOG_CHANNEL, DEFAULT_DEBUG_LOG_FILE
from .models import LogEntry
from .security.sanitizers import mask_message

# Level names accepted by DebugLogger.log()
_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class DebugLogFormatter(logging.Formatter):
    """
    Formats records as ``[<timestamp>] <channel>.<LEVEL>: <message>``.

    The timestamp comes from the ``LogEntry`` attached to the record, so the file shows
    exactly the entry that was built after masking.
    """

    def __init__(self, channel: str = DEBUG_LOG_CHANNEL):
        super().__init__()
        self.channel = channel

    def format(self, record: logging.LogRecord) -> str:
        entry: Optional[LogEntry] = getattr(record, "entry", None)
        if entry is None:
            timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
            message = record.getMessage()
            level = record.levelname
        else:
            timestamp = entry.timestamp.isoformat()
            message = entry.message
            level = entry.level
        return f"[{timestamp}] {self.channel}.{level}: {message}"


class DebugLogger:
    """
    Masked, file-backed debug logger owned by a single client.

    Args:
        log_file: Destination file; defaults to ``logs/debug.log`` in the working
            directory. Parent directories are created.
        secrets: Callable returning the credential values to mask. It is consulted on
            every call so tokens issued by a refresh are masked too; values seen once
            stay masked for the lifetime of the logger.
        channel: Channel name written on every line.
    """

    def __init__(
        self,
        log_file: Optional[Union[str, Path]] = None,
        secrets: Optional[Callable[[], Iterable[Optional[str]]]] = None,
        channel: str = DEBUG_LOG_CHANNEL,
    ):
        self.log_file = Path(log_file) if log_file else Path.cwd() / DEFAULT_DEBUG_LOG_FILE
        self.channel = channel
        self._secrets_provider = secrets
        self._known_secrets: Set[str] = set()

        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        # Not registered with logging.getLogger(): the logger lives and dies with the client
        self._logger = logging.Logger(f"{channel}.{id(self):x}", level=logging.DEBUG)
        self._logger.propagate = False
        self._handler = logging.FileHandler(self.log_file, encoding="utf-8", delay=True)
        self._handler.setFormatter(DebugLogFormatter(channel))
        self._logger.addHandler(self._handler)
        self._closed = False

    def _secrets(self) -> List[str]:
        if self._secrets_provider is not None:
            self._known_secrets.update(value for value in self._secrets_provider() if value)
        return list(self._known_secrets)

    def mask(self, message: str) -> str:
        """Return ``message`` with every known secret and email address masked."""
        return mask_message(message, self._secrets())

    def log(self, level: str, message: str) -> LogEntry:
        """
        Masks ``message`` and writes it at ``level``.

        Args:
            level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL (case-insensitive)
            message: Raw, unmasked text

        Returns:
            LogEntry: The entry that was written

        Raises:
            ValueError: If ``level`` is not a known level name
        """
        level_name = level.upper()
        if level_name not in _LEVELS:
            raise ValueError(f"Unknown log level: {level}")

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc),
            level=level_name,
            message=self.mask(str(message)),
        )
        if not self._closed:
            self._logger.log(_LEVELS[level_name], entry.message, extra={"entry": entry})
        return entry

    def debug(self, message: str) -> LogEntry:
        return self.log("DEBUG", message)

    def info(self, message: str) -> LogEntry:
        return self.log("INFO", message)

    def warning(self, message: str) -> LogEntry:
        return self.log("WARNING", message)

    def error(self, message: str) -> LogEntry:
        return self.log("ERROR", message)

    def read(self) -> str:
        """Return the current contents of the log file ('' if nothing was written)."""
        self._handler.flush()
        if not self.log_file.exists():
            return ""
        return self.log_file.read_text(encoding="utf-8")

    def close(self) -> None:
        """Detach and close the file handler."""
        if self._closed:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._closed = True


__all__ = ["DebugLogger", "DebugLogFormatter"]
