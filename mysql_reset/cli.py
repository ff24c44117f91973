"""Command-line entry point for ``mysql-reset``."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, NoReturn, Sequence
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from .config import apply_overrides, get_settings
from .errors import ExitCode, ResetError, UsageError, UserAbortedError
from .logging_config import configure_logging
from .reporting import report_failure
from .reset import reset_database


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent / "VERSION"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "unknown"


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises :class:`UsageError` instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, hint=f"Run `{self.prog} --help` for usage.")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="mysql-reset",
        allow_abbrev=False,
        description="Rebuild a local MySQL database from create/insert SQL fixture directories.",
    )
    deletion = parser.add_mutually_exclusive_group()
    deletion.add_argument("--fresh", metavar="NAME", help="drop schema NAME before loading, without prompting")
    deletion.add_argument("--initial", action="store_true", help="never drop a schema and skip the prompt")
    parser.add_argument("--user", metavar="NAME", help="admin user (default: root)")
    parser.add_argument("--password", metavar="PASS", help="admin password (prompted for when omitted)")
    parser.add_argument("--host", metavar="HOST", help="server host (default: 127.0.0.1)")
    parser.add_argument("--port", metavar="PORT", help="server port (default: 3306)")
    parser.add_argument("--no-insert", action="store_true", help="run create scripts only")
    parser.add_argument("--root", metavar="DIR", help="project root holding the fixture directories")
    parser.add_argument("--client", metavar="PATH", help="mysql client binary (default: mysql)")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--log-json", action="store_true", help="render logs as JSON")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_load_version()}")
    return parser


def settings_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate parsed flags into settings overrides; unset flags are None."""

    overrides: Dict[str, Any] = {
        "host": args.host,
        "port": args.port,
        "user": args.user,
        "password": args.password,
        "client": args.client,
        "root": args.root,
        "skip_insert": True if args.no_insert else None,
    }
    if args.fresh is not None:
        overrides["database"] = args.fresh
        overrides["delete"] = True
    elif args.initial:
        overrides["delete"] = False
    return overrides


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        configure_logging()
        report_failure(exc)
        return exc.exit_code

    configure_logging(verbose=args.verbose, json_logs=args.log_json)
    bind_contextvars(run_id=uuid4().hex)
    log = structlog.get_logger()

    try:
        settings = apply_overrides(get_settings(), settings_overrides(args))
        log.info("reset_started", host=settings.host, port=settings.port, user=settings.user)
        reset_database(settings)
    except KeyboardInterrupt:
        error = UserAbortedError("Interrupted by the operator.")
        report_failure(error)
        return error.exit_code
    except ResetError as exc:
        report_failure(exc)
        return exc.exit_code
    finally:
        unbind_contextvars("run_id")

    return ExitCode.SUCCESS
