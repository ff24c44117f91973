"""Run a full reset: checks, optional schema drop, then fixture replay."""

from __future__ import annotations

from typing import Callable

import structlog

from . import prompts
from .config import ResetSettings
from .environment import (
    check_connection,
    ensure_client_installed,
    ensure_project_root,
    locate_fixture_directories,
    resolve_password,
)
from .errors import BatchFailedError, ClientCommandError, ConnectionFailedError
from .fixtures import load_fixtures, privilege_hint
from .mysql_client import MysqlClient, Runner
from .reporting import report_skip, report_step, report_success
from .schemas import select_schema_for_deletion


def should_delete(settings: ResetSettings, *, interactive: bool) -> bool:
    """Decide whether a schema is dropped before loading.

    An explicit ``--fresh``/``--initial`` wins. Otherwise the operator is
    asked, and non-interactive runs never delete.
    """

    if settings.delete is not None:
        return settings.delete
    if not interactive:
        structlog.get_logger().info("schema_deletion_skipped", reason="non_interactive")
        return False
    return prompts.confirm("Delete an existing schema before loading fixtures?", default=False)


def _drop_schema(client: MysqlClient, name: str) -> None:
    report_step(f"Dropping schema {name}")
    try:
        client.drop_schema(name)
    except ClientCommandError as exc:
        raise BatchFailedError(
            f"Could not drop schema '{name}'.",
            hint=privilege_hint(client.settings.user),
            detail=exc.stderr or None,
        ) from exc
    structlog.get_logger().info("schema_dropped", schema=name)
    report_success(f"Schema {name} dropped.")


def reset_database(
    settings: ResetSettings,
    *,
    interactive: bool | None = None,
    runner: Runner | None = None,
    which: Callable[[str], str | None] | None = None,
) -> None:
    """Run every reset stage in order, raising ``ResetError`` on failure."""

    log = structlog.get_logger()
    if interactive is None:
        interactive = prompts.is_interactive()

    root = ensure_project_root(settings.root)
    directories = locate_fixture_directories(root)
    log.info("fixture_directories_located", create=str(directories.create), insert=str(directories.insert))

    client_path = ensure_client_installed(settings.client, which=which)
    log.info("client_located", path=client_path)

    settings = resolve_password(settings)
    client = MysqlClient(settings=settings, runner=runner)
    check_connection(client)

    if should_delete(settings, interactive=interactive):
        if settings.database is not None:
            target = settings.database
        else:
            try:
                target = select_schema_for_deletion(client)
            except ClientCommandError as exc:
                raise ConnectionFailedError(
                    "Could not list schemas for selection.",
                    hint="Check that the server is still running.",
                    detail=exc.stderr or None,
                ) from exc
        _drop_schema(client, target)
    else:
        report_skip("No schema deleted.")

    load_fixtures(client, directories, skip_insert=settings.skip_insert)
    log.info("reset_completed")
    report_success("Database reset complete.")
