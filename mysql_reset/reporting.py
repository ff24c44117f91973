"""Console output for progress lines and failures."""

from __future__ import annotations

import structlog
from rich.console import Console
from rich.markup import escape

from .errors import ResetError

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def report_step(message: str) -> None:
    console.print(f"[cyan]==>[/] {escape(message)}")


def report_skip(message: str) -> None:
    console.print(f"[yellow]--[/] {escape(message)}")


def report_success(message: str) -> None:
    console.print(f"[bold green]OK[/] {escape(message)}")


def report_failure(error: ResetError) -> None:
    """Print *error* with its hint and detail, and log it."""

    error_console.print(f"[bold red]error:[/] {escape(error.message)}")
    if error.hint:
        error_console.print(f"[yellow]hint:[/] {escape(error.hint)}")
    if error.detail:
        error_console.print(f"[dim]{escape(error.detail)}[/]")

    structlog.get_logger().error(
        "reset_failed",
        error=type(error).__name__,
        exit_code=int(error.exit_code),
        message=error.message,
    )
