"""Error kinds raised by the safe backup actions.

Each kind also derives from the closest built-in exception so callers
that only care about ``OSError`` or ``ValueError`` keep working.
Plain ``OSError`` from the filesystem is never wrapped.
"""


class SafeBackupError(Exception):
    """Base class for every error this package raises itself."""


class InvalidInputError(SafeBackupError, ValueError):
    """Rejected filename or oversized file."""


class FileTooLargeError(InvalidInputError):
    def __init__(self, path: str, size: int, limit: int):
        super().__init__(f"File too large: {path} ({size} bytes, limit {limit})")
        self.path = path
        self.size = size
        self.limit = limit


class UnknownCommandError(InvalidInputError):
    def __init__(self, text: str):
        super().__init__(f"Invalid command: {text!r}")
        self.text = text


class NotFoundError(SafeBackupError, FileNotFoundError):
    """Missing source, backup or target file."""


class IncompleteCopyError(SafeBackupError, OSError):
    """Fewer bytes reached the staging file than the source reported."""

    def __init__(self, path: str, expected: int, copied: int):
        super().__init__(
            f"Failed to copy entire file {path}: {copied} of {expected} bytes"
        )
        self.path = path
        self.expected = expected
        self.copied = copied


class DeleteRefusedError(SafeBackupError, PermissionError):
    """The user did not type the delete confirmation."""


class AuditLogError(SafeBackupError, OSError):
    """The audit log could not be written."""


class StagingBusyError(SafeBackupError, OSError):
    """Another process holds the staging lock for this destination."""

    def __init__(self, lock_path: str):
        super().__init__(f"Staging file is in use by another process ({lock_path})")
        self.lock_path = lock_path
