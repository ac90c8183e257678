"""Copy-to-staging followed by an atomic rename.

The destination is only ever the file that was there before or the
fully written replacement:

    notes.txt ──copy──> notes.txt.bak.tmp ──os.replace──> notes.txt.bak

A short or failed copy deletes the staging file and leaves the
destination untouched. While the copy runs, an OS file lock on
``<staging>.lock`` keeps a second instance out of the same staging
file. The empty lock file itself may remain after release.
"""

import logging
import os
import stat

from filelock import FileLock, Timeout

from safebackup.core.backup_config import (
    COPY_CHUNK_SIZE,
    LOCK_SUFFIX,
    MAX_FILE_SIZE,
    STAGING_SUFFIX,
)
from safebackup.core.errors import (
    FileTooLargeError,
    IncompleteCopyError,
    NotFoundError,
    StagingBusyError,
)

logger = logging.getLogger(__name__)


def staging_path_for(dest_name: str) -> str:
    return dest_name + STAGING_SUFFIX


def check_source(path: str, max_size: int = MAX_FILE_SIZE) -> int:
    """Return the size of ``path`` after checking it can be copied.

    Raises NotFoundError if it is missing or not a regular file and
    FileTooLargeError if it is larger than ``max_size``.
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        raise NotFoundError(f"File '{path}' not found") from None
    if not stat.S_ISREG(st.st_mode):
        raise NotFoundError(f"'{path}' is not a regular file")
    if st.st_size > max_size:
        raise FileTooLargeError(path, st.st_size, max_size)
    return st.st_size


def copy_stream(src, dst, chunk_size: int = COPY_CHUNK_SIZE) -> int:
    """Copy ``src`` into ``dst`` chunk by chunk. Returns bytes written."""
    copied = 0
    for chunk in iter(lambda: src.read(chunk_size), b""):
        dst.write(chunk)
        copied += len(chunk)
    return copied


def staging_lock(staging_path: str) -> FileLock:
    """Acquire the OS lock guarding ``staging_path`` without waiting.

    Raises StagingBusyError if another process holds it. The lock is
    released by the OS if its holder dies, so there is nothing stale to
    reclaim.
    """
    lock = FileLock(staging_path + LOCK_SUFFIX, timeout=0)
    try:
        lock.acquire()
    except Timeout:
        raise StagingBusyError(lock.lock_file) from None
    logger.debug("Acquired staging lock %s", lock.lock_file)
    return lock


def _discard(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def safe_replace(source_path: str, dest_name: str, max_size: int = MAX_FILE_SIZE) -> int:
    """Replace ``dest_name`` with a copy of ``source_path``.

    Returns the number of bytes copied. The staging file is removed on
    any failure, including a byte count that does not match the size
    the source reported before the copy started.
    """
    expected = check_source(source_path, max_size)
    staging = staging_path_for(dest_name)

    lock = staging_lock(staging)
    try:
        try:
            with open(source_path, "rb") as src, open(staging, "wb") as dst:
                mode = stat.S_IMODE(os.fstat(dst.fileno()).st_mode)
                os.chmod(staging, mode | stat.S_IWUSR)
                copied = copy_stream(src, dst)
                dst.flush()
                os.fsync(dst.fileno())
            if copied != expected:
                raise IncompleteCopyError(source_path, expected, copied)
            os.replace(staging, dest_name)
        except BaseException:
            _discard(staging)
            raise
    finally:
        lock.release()

    logger.info("Replaced %s from %s (%d bytes)", dest_name, source_path, copied)
    return copied
