"""Launcher for Safe Backup from a source checkout.

Usage:
    python run.py
    python run.py --file notes.txt --command backup
    python run.py --pause
"""

import sys

from safebackup.cli import main

if __name__ == "__main__":
    sys.exit(main())
