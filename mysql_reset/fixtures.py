"""Loaders that replay SQL fixture directories through the mysql client."""

from __future__ import annotations

from pathlib import Path
from typing import List

import structlog

from .environment import FixtureDirectories
from .errors import BatchFailedError, FixturesMissingError
from .mysql_client import MysqlClient
from .reporting import report_skip, report_step, report_success


def privilege_hint(user: str) -> str:
    if user == "root":
        return "The root user ran the batch, so check the SQL files for errors."
    return f"User '{user}' may lack the privileges these scripts need; retry with --user root."


def collect_sql_files(directory: Path) -> List[Path]:
    """Return every ``*.sql`` file inside *directory* in shell glob order."""

    return sorted(path for path in directory.glob("*.sql") if path.is_file())


def concatenate_sql(files: List[Path]) -> bytes:
    """Join fixture files byte for byte, each ending in a newline."""

    chunks = []
    for file_path in files:
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise FixturesMissingError(
                f"Could not read fixture {file_path}.",
                hint="Check that the file exists and is readable.",
                detail=str(exc),
            ) from exc
        chunks.append(data if data.endswith(b"\n") else data + b"\n")
    return b"".join(chunks)


def load_fixture_batch(client: MysqlClient, directory: Path, *, label: str) -> bool:
    """Run all SQL files in *directory* as one batch.

    Returns False when there was nothing to run. A non-zero client exit
    raises :class:`BatchFailedError`.
    """

    log = structlog.get_logger().bind(batch=label, directory=str(directory))
    files = collect_sql_files(directory)
    if not files:
        log.info("fixture_batch_skipped", reason="no_sql_files")
        report_skip(f"No SQL files in {directory}; {label} step skipped.")
        return False

    log.info("fixture_batch_started", files=[path.name for path in files])
    report_step(f"Running {len(files)} {label} script(s) from {directory}")
    result = client.run_script(concatenate_sql(files))
    if result.returncode != 0:
        user = client.settings.user
        log.error("fixture_batch_failed", returncode=result.returncode)
        raise BatchFailedError(
            f"The {label} batch in {directory} failed (mysql exit status {result.returncode}).",
            hint=privilege_hint(user),
            detail=(result.stderr or "").strip() or None,
        )

    log.info("fixture_batch_completed", files=len(files))
    report_success(f"{label.capitalize()} scripts applied.")
    return True


def load_fixtures(client: MysqlClient, directories: FixtureDirectories, *, skip_insert: bool = False) -> None:
    """Run the create batch, then the insert batch unless *skip_insert*."""

    load_fixture_batch(client, directories.create, label="create")
    if skip_insert:
        structlog.get_logger().info("fixture_batch_skipped", batch="insert", reason="no_insert_flag")
        report_skip("Insert step skipped (--no-insert).")
        return
    load_fixture_batch(client, directories.insert, label="insert")
