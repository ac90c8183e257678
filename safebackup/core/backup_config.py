"""Safe backup constants: limits, artifact suffixes and audit log format."""

import string

# Filename rules
MAX_FILENAME_LENGTH = 255
VALID_FILENAME_CHARS = frozenset(string.ascii_letters + string.digits + "_-.")

# Files above this size are refused by backup and restore
MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB

# Artifact names are derived by appending these to the managed filename
BACKUP_SUFFIX = ".bak"
STAGING_SUFFIX = ".tmp"
LOCK_SUFFIX = ".lock"

COPY_CHUNK_SIZE = 65536

# Audit trail, relative to the working directory
AUDIT_LOG_FILENAME = "logfile.txt"
AUDIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
