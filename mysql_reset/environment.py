"""Checks that run before anything touches the database."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Tuple

import structlog

from . import prompts
from .config import ResetSettings
from .errors import (
    ClientCommandError,
    ClientMissingError,
    ConnectionFailedError,
    FixturesMissingError,
    ProjectRootMissingError,
)
from .mysql_client import MysqlClient

# Candidate parents of the create/insert pair, in priority order.
FIXTURE_LAYOUTS: Tuple[Path, ...] = (Path("."), Path("sql"), Path("fixtures") / "sql")

CLIENT_INSTALL_HINT = (
    "Install the MySQL client (for example `apt install mysql-client` or "
    "`brew install mysql-client`), or point MYSQL_RESET_CLIENT / --client at it."
)


@dataclass(frozen=True)
class FixtureDirectories:
    create: Path
    insert: Path


def ensure_project_root(root: Path) -> Path:
    resolved = root.expanduser()
    if not resolved.is_dir():
        raise ProjectRootMissingError(
            f"Project root {resolved} does not exist or is not a directory.",
            hint="Run from your project checkout or pass --root.",
        )
    return resolved.resolve()


def locate_fixture_directories(root: Path) -> FixtureDirectories:
    """Return the first layout under *root* where both directories exist."""

    for layout in FIXTURE_LAYOUTS:
        create = root / layout / "create"
        insert = root / layout / "insert"
        if create.is_dir() and insert.is_dir():
            return FixtureDirectories(create=create, insert=insert)

    searched = ", ".join(str(layout / "{create,insert}") for layout in FIXTURE_LAYOUTS)
    raise FixturesMissingError(
        f"No fixture directories found under {root}.",
        hint=f"Expected one of: {searched}",
    )


def ensure_client_installed(client: str, *, which: Callable[[str], str | None] | None = None) -> str:
    location = (which or shutil.which)(client)
    if location is None:
        raise ClientMissingError(f"Database client '{client}' was not found on PATH.", hint=CLIENT_INSTALL_HINT)
    return location


def resolve_password(settings: ResetSettings) -> ResetSettings:
    """Return *settings* with a password, prompting for one when missing."""

    if settings.password is not None:
        return settings
    password = prompts.ask_password(f"MySQL password for {settings.user}@{settings.host}")
    return settings.model_copy(update={"password": password})


def check_connection(client: MysqlClient) -> List[str]:
    """List schemas to prove the credentials work; returns the schema list."""

    settings = client.settings
    try:
        schemas = client.list_schemas()
    except ClientCommandError as exc:
        raise ConnectionFailedError(
            f"Could not connect to MySQL at {settings.host}:{settings.port} as {settings.user}.",
            hint="Check the password and that the server is running.",
            detail=exc.stderr or None,
        ) from exc

    structlog.get_logger().info("connection_verified", host=settings.host, port=settings.port, schemas=len(schemas))
    return schemas
