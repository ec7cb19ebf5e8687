#!/usr/bin/env python3
"""
Todo - terminal task tracker.

Usage:
    todo.py             Open the task list (press 'h' inside for help)

Tasks are kept in ~/.todo-cli and saved when the app quits.
"""

import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from todo_tui.app import run  # noqa: E402
from todo_tui.logging_setup import setup_logging  # noqa: E402
from todo_tui.storage import StorageError  # noqa: E402


def main() -> int:
    setup_logging()
    try:
        return run()
    except StorageError as exc:
        print(f"todo: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
