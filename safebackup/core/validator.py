"""Filename validation.

Every operation works on a bare name in the current working directory,
so anything that could address another directory is refused.
"""

from safebackup.core.backup_config import MAX_FILENAME_LENGTH, VALID_FILENAME_CHARS
from safebackup.core.errors import InvalidInputError


def is_valid_filename(name: str) -> bool:
    """Return True if ``name`` is safe to use as a managed filename."""
    if not name or len(name) > MAX_FILENAME_LENGTH:
        return False
    if ".." in name or "/" in name or "\\" in name:
        return False
    return all(c in VALID_FILENAME_CHARS for c in name)


def require_valid_filename(name: str) -> str:
    if not is_valid_filename(name):
        raise InvalidInputError("Invalid filename")
    return name
