"""Blocking terminal prompts built on rich."""

from __future__ import annotations

import sys

from rich.prompt import Confirm, Prompt

from .errors import UserAbortedError
from .reporting import console


def is_interactive() -> bool:
    """Return True when both standard input and output are terminals."""

    return sys.stdin.isatty() and sys.stdout.isatty()


def ask_text(question: str) -> str:
    try:
        return Prompt.ask(question, console=console).strip()
    except EOFError as exc:
        raise UserAbortedError("Input closed before an answer was given.") from exc


def ask_password(question: str) -> str:
    """Read a secret without echoing it to the terminal."""

    try:
        return Prompt.ask(question, console=console, password=True)
    except EOFError as exc:
        raise UserAbortedError("Input closed before a password was given.") from exc


def confirm(question: str, *, default: bool = False) -> bool:
    try:
        return Confirm.ask(question, console=console, default=default)
    except EOFError as exc:
        raise UserAbortedError("Input closed before an answer was given.") from exc
