"""Exit codes and the exception hierarchy raised while resetting a database."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses, one per failure class."""

    SUCCESS = 0
    CONFIG_INVALID = 1
    USAGE = 2
    FIXTURES_MISSING = 4
    CLIENT_MISSING = 5
    CONNECTION_FAILED = 6
    BATCH_FAILED = 7
    USER_ABORTED = 8
    INVALID_SCHEMA = 15
    ROOT_MISSING = 200


class ResetError(Exception):
    """Base class for failures that end the run with a specific exit code."""

    exit_code: ExitCode = ExitCode.CONFIG_INVALID

    def __init__(self, message: str, *, hint: str | None = None, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.detail = detail


class UsageError(ResetError):
    exit_code = ExitCode.USAGE


class ConfigError(ResetError):
    exit_code = ExitCode.CONFIG_INVALID


class ProjectRootMissingError(ResetError):
    exit_code = ExitCode.ROOT_MISSING


class FixturesMissingError(ResetError):
    exit_code = ExitCode.FIXTURES_MISSING


class ClientMissingError(ResetError):
    exit_code = ExitCode.CLIENT_MISSING


class ConnectionFailedError(ResetError):
    exit_code = ExitCode.CONNECTION_FAILED


class BatchFailedError(ResetError):
    exit_code = ExitCode.BATCH_FAILED


class UserAbortedError(ResetError):
    exit_code = ExitCode.USER_ABORTED


class InvalidSchemaError(ResetError):
    exit_code = ExitCode.INVALID_SCHEMA


class ClientCommandError(Exception):
    """Raised when a mysql client invocation exits with a non-zero status."""

    def __init__(self, action: str, returncode: int, stderr: str = "") -> None:
        super().__init__(f"mysql client failed to {action} (exit status {returncode})")
        self.action = action
        self.returncode = returncode
        self.stderr = stderr.strip()
