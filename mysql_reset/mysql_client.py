"""Thin wrapper utilities around the ``mysql`` command-line client."""

from __future__ import annotations

import subprocess
from typing import Callable, List, Sequence

import structlog

from .config import ResetSettings
from .errors import ClientCommandError

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]

PASSWORD_FLAG = "--password="


def _decode(output: bytes | str | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def quote_identifier(name: str) -> str:
    """Return *name* as a backtick-quoted MySQL identifier."""

    return "`" + name.replace("`", "``") + "`"


def redact_command(command: Sequence[str]) -> List[str]:
    """Mask the password argument so commands can be logged."""

    return [PASSWORD_FLAG + "***" if part.startswith(PASSWORD_FLAG) else part for part in command]


class MysqlClient:
    """Encapsulate mysql client invocations for easier testing."""

    def __init__(self, *, settings: ResetSettings, runner: Runner | None = None) -> None:
        if settings.password is None:
            raise ValueError("A password must be resolved before the mysql client is invoked.")

        self._settings = settings
        self._runner = runner or subprocess.run

    @property
    def settings(self) -> ResetSettings:
        return self._settings

    def base_command(self) -> List[str]:
        """Return the client binary plus connection arguments."""

        settings = self._settings
        return [
            settings.client,
            f"--host={settings.host}",
            f"--port={settings.port}",
            f"--user={settings.user}",
            f"{PASSWORD_FLAG}{settings.password}",
        ]

    def execute(self, statement: str) -> "subprocess.CompletedProcess[str]":
        """Run a single statement with tab-separated, header-less output."""

        command = [*self.base_command(), "--batch", "--skip-column-names", "--execute", statement]
        return self._run(command)

    def run_script(self, sql_bytes: bytes) -> "subprocess.CompletedProcess[str]":
        """Feed *sql_bytes* to the client's standard input as one batch.

        The bytes are passed through untouched so fixtures in any encoding
        reach the client as written.
        """

        return self._run(self.base_command(), sql_bytes=sql_bytes)

    def list_schemas(self) -> List[str]:
        """Return schema names in the order the server reports them."""

        result = self.execute("SHOW DATABASES")
        if result.returncode != 0:
            raise ClientCommandError("list schemas", result.returncode, result.stderr or "")
        return [line.strip() for line in (result.stdout or "").splitlines() if line.strip()]

    def drop_schema(self, name: str) -> None:
        result = self.execute(f"DROP DATABASE IF EXISTS {quote_identifier(name)}")
        if result.returncode != 0:
            raise ClientCommandError(f"drop schema {name}", result.returncode, result.stderr or "")

    def _run(self, command: List[str], *, sql_bytes: bytes | None = None) -> "subprocess.CompletedProcess[str]":
        structlog.get_logger().debug("mysql_client_invoked", command=redact_command(command))
        result = self._runner(command, input=sql_bytes, capture_output=True, check=False)
        return subprocess.CompletedProcess(result.args, result.returncode, _decode(result.stdout), _decode(result.stderr))
