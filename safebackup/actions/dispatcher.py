"""Backup, restore and delete actions.

Each action validates the filename, checks the files it needs, asks for
confirmation before anything is overwritten or removed, then records
what it did in the audit log.

Confirmation rules:
    backup / restore  overwrite needs "yes" (any case); declining is not an error
    delete            needs exactly "DELETE"; declining raises DeleteRefusedError
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum

from safebackup.audit.audit_logger import AuditLog
from safebackup.actions.prompter import Prompter
from safebackup.core.backup_config import BACKUP_SUFFIX, MAX_FILE_SIZE
from safebackup.core.errors import (
    AuditLogError,
    DeleteRefusedError,
    NotFoundError,
    UnknownCommandError,
)
from safebackup.core.safe_replace import check_source, safe_replace
from safebackup.core.validator import require_valid_filename

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "DELETE"


class Command(Enum):
    BACKUP = "backup"
    RESTORE = "restore"
    DELETE = "delete"


def parse_command(text: str) -> Command:
    """Map user input to a Command. Raises UnknownCommandError otherwise."""
    try:
        return Command(text.strip())
    except ValueError:
        raise UnknownCommandError(text) from None


def backup_name(filename: str) -> str:
    return filename + BACKUP_SUFFIX


@dataclass
class ActionOutcome:
    """Result of a single action that did not raise."""
    command: Command
    filename: str
    performed: bool  # False when the user declined an overwrite
    message: str
    bytes_copied: int | None = None
    warning: str | None = None


class ActionDispatcher:
    """Runs one action against one file.

    Parameters
    ----------
    prompter:
        Source of confirmations and sink for user-facing messages.
    audit_log:
        Receives one record per completed action.
    max_size:
        Largest file backup and restore will copy.
    """

    def __init__(self, prompter: Prompter, audit_log: AuditLog, max_size: int = MAX_FILE_SIZE):
        self.prompter = prompter
        self.audit_log = audit_log
        self.max_size = max_size

    def run(self, command: Command, filename: str) -> ActionOutcome:
        handlers = {
            Command.BACKUP: self.backup,
            Command.RESTORE: self.restore,
            Command.DELETE: self.delete,
        }
        return handlers[command](filename)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def backup(self, filename: str) -> ActionOutcome:
        require_valid_filename(filename)
        check_source(filename, self.max_size)

        bak = backup_name(filename)
        if os.path.exists(bak) and not self._confirm_overwrite(
            f"WARNING: Backup file {bak} already exists. Overwrite? (yes/no): "
        ):
            return self._cancelled(Command.BACKUP, filename, "Backup cancelled.")

        copied = safe_replace(filename, bak, self.max_size)
        message = f"Backup created: {bak}"
        self.prompter.tell(message)
        self.audit_log.record(f"Performed backup on {filename}")
        logger.info("Backed up %s -> %s", filename, bak)
        return ActionOutcome(Command.BACKUP, filename, True, message, bytes_copied=copied)

    def restore(self, filename: str) -> ActionOutcome:
        require_valid_filename(filename)
        bak = backup_name(filename)
        if not os.path.exists(bak):
            raise NotFoundError(f"Backup file '{bak}' not found")
        check_source(bak, self.max_size)

        if os.path.exists(filename) and not self._confirm_overwrite(
            f"WARNING: Target file {filename} already exists. Overwrite? (yes/no): "
        ):
            return self._cancelled(Command.RESTORE, filename, "Restore cancelled")

        copied = safe_replace(bak, filename, self.max_size)
        message = f"File restored from: {bak}"
        self.prompter.tell(message)
        self.audit_log.record(f"Performed restore on {filename}")
        logger.info("Restored %s <- %s", filename, bak)
        return ActionOutcome(Command.RESTORE, filename, True, message, bytes_copied=copied)

    def delete(self, filename: str) -> ActionOutcome:
        require_valid_filename(filename)
        if not os.path.exists(filename):
            raise NotFoundError(f"File '{filename}' not found")

        answer = self.prompter.ask(
            f"Are you sure you want to delete {filename}? "
            f"(type '{DELETE_CONFIRMATION}' to confirm): "
        )
        if answer.strip() != DELETE_CONFIRMATION:
            self.prompter.tell("Delete cancelled")
            logger.info("Delete of %s refused by user", filename)
            raise DeleteRefusedError("Delete permission denied")

        os.remove(filename)
        message = "File deleted"
        self.prompter.tell(message)
        logger.info("Deleted %s", filename)

        # The file is already gone, so a logging failure only warns
        warning = None
        try:
            self.audit_log.record(f"Performed delete on {filename}")
        except AuditLogError as exc:
            warning = f"Warning: Could not log delete action: {exc}"
            self.prompter.warn(warning)
            logger.warning("Audit record for delete of %s failed: %s", filename, exc)
        return ActionOutcome(Command.DELETE, filename, True, message, warning=warning)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _confirm_overwrite(self, prompt: str) -> bool:
        return self.prompter.ask(prompt).strip().lower() == "yes"

    def _cancelled(self, command: Command, filename: str, message: str) -> ActionOutcome:
        self.prompter.tell(message)
        logger.info("%s of %s cancelled by user", command.value, filename)
        return ActionOutcome(command, filename, False, message)
