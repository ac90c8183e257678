"""Interactive command line for Safe Backup.

Reads a filename and a command (backup, restore or delete) from stdin,
runs the action in the current directory and exits 0 on success or
when the user declines an overwrite, 1 otherwise.

Usage:
    safe-backup
    safe-backup -C ~/notes --file todo.txt --command backup
    safe-backup --log-level DEBUG --log-file audit.txt
"""

import argparse
import logging
import os

from safebackup.actions.dispatcher import ActionDispatcher, parse_command
from safebackup.actions.prompter import Prompter
from safebackup.audit.audit_logger import FileAuditLogger
from safebackup.core.backup_config import AUDIT_LOG_FILENAME
from safebackup.core.errors import SafeBackupError, UnknownCommandError
from safebackup.core.validator import is_valid_filename

logger = logging.getLogger("safebackup")

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-backup",
        description="Back up, restore or delete a single file with confirmation",
    )
    parser.add_argument(
        "-C", "--directory",
        default=None,
        help="Run as if started in this directory",
    )
    parser.add_argument(
        "--file",
        default=None,
        help="Filename to operate on (prompted for if omitted)",
    )
    parser.add_argument(
        "--command",
        default=None,
        help="backup, restore or delete (prompted for if omitted)",
    )
    parser.add_argument(
        "--log-file",
        default=AUDIT_LOG_FILENAME,
        help=f"Audit log path (default: {AUDIT_LOG_FILENAME})",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic logging level",
    )
    parser.add_argument(
        "--pause",
        action="store_true",
        help="Wait for Enter before exiting",
    )
    return parser


def run(args, prompter: Prompter) -> int:
    """Drive one filename/command exchange. Returns the exit code."""
    prompter.tell("Safe Backup")

    filename = args.file
    if filename is None:
        filename = prompter.ask("Please enter your file name: ")
    filename = filename.strip()

    if not is_valid_filename(filename):
        prompter.warn(
            "\n[REJECTED] Invalid filename: Potential path traversal or illegal characters."
        )
        return EXIT_FAILURE

    command_text = args.command
    if command_text is None:
        command_text = prompter.ask("Enter your command (backup, restore, delete): ")
    try:
        command = parse_command(command_text)
    except UnknownCommandError:
        prompter.warn("Invalid command")
        return EXIT_FAILURE

    audit_log = FileAuditLogger(args.log_file)
    dispatcher = ActionDispatcher(prompter, audit_log)
    try:
        dispatcher.run(command, filename)
    except (SafeBackupError, OSError) as exc:
        logger.debug("%s on %s failed", command.value, filename, exc_info=True)
        prompter.warn(f"Error: {exc}")
        return EXIT_FAILURE
    finally:
        audit_log.close()
    return EXIT_OK


def main(argv=None, prompter: Prompter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.directory:
        try:
            os.chdir(args.directory)
        except OSError as exc:
            parser.error(f"cannot change to {args.directory}: {exc}")

    prompter = prompter or Prompter()
    code = run(args, prompter)

    if args.pause:
        prompter.ask("\nPress Enter to exit...")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
