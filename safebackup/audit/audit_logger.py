"""Append-only audit trail of completed actions.

Each call to ``record`` produces exactly one line:

    [2025-02-01 14:30:00] Performed backup on notes.txt

Newlines and carriage returns in the message are replaced with spaces
so a crafted filename cannot forge extra entries.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from safebackup.core.backup_config import AUDIT_LOG_FILENAME, AUDIT_TIMESTAMP_FORMAT
from safebackup.core.errors import AuditLogError

logger = logging.getLogger(__name__)


def sanitize_message(message: str) -> str:
    return message.replace("\n", " ").replace("\r", " ")


def format_entry(message: str, now: datetime | None = None) -> str:
    """Return the log line for ``message`` (without trailing newline)."""
    ts = (now or datetime.now()).strftime(AUDIT_TIMESTAMP_FORMAT)
    return f"[{ts}] {sanitize_message(message)}"


class AuditLog(ABC):
    """Interface for audit sinks: one ``record(message)`` operation."""

    @abstractmethod
    def record(self, message: str) -> str:
        """Append ``message`` and return the formatted entry."""

    def close(self):
        pass


class FileAuditLogger(AuditLog):
    """Audit sink backed by a text file opened in append mode.

    The file is opened on the first record and kept open until
    ``close()``. It is created if missing and never truncated.
    """

    def __init__(self, path: str = AUDIT_LOG_FILENAME):
        self.path = Path(path)
        self._handle = None

    def _get_handle(self):
        if self._handle is None:
            self._handle = open(self.path, "a", encoding="utf-8")
        return self._handle

    def record(self, message: str) -> str:
        entry = format_entry(message)
        try:
            handle = self._get_handle()
            handle.write(entry + "\n")
            handle.flush()
        except OSError as exc:
            raise AuditLogError(f"Could not write audit log {self.path}: {exc}") from exc
        logger.debug("Audit: %s", entry)
        return entry

    def close(self):
        if self._handle is not None:
            self._handle.close()
            self._handle = None


class MemoryAuditLogger(AuditLog):
    """In-memory audit sink, mainly for tests."""

    def __init__(self):
        self.entries: list[str] = []

    def record(self, message: str) -> str:
        entry = format_entry(message)
        self.entries.append(entry)
        return entry

    @property
    def messages(self) -> list[str]:
        """Entries with the timestamp prefix stripped."""
        return [e.split("] ", 1)[1] for e in self.entries]
