"""Utility script to reset the local MySQL database from SQL fixtures.

Usage:
    python scripts/reset_local_db.py [--fresh NAME | --initial] [--no-insert]

Environment:
    MYSQL_RESET_HOST, MYSQL_RESET_PORT, MYSQL_RESET_USER and
    MYSQL_RESET_PASSWORD override the connection defaults; flags win over
    the environment.
"""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover - import-time guard
    sys.path.insert(0, str(ROOT))

from mysql_reset.cli import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
