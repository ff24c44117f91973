"""Interactive selection of a schema to drop before reloading fixtures."""

from __future__ import annotations

from typing import Callable, List, Sequence

import structlog

from . import prompts
from .errors import InvalidSchemaError, UserAbortedError
from .mysql_client import MysqlClient
from .reporting import console

SYSTEM_SCHEMAS = frozenset({"information_schema", "mysql", "performance_schema", "sys"})


def user_schemas(schemas: Sequence[str]) -> List[str]:
    return [name for name in schemas if name.lower() not in SYSTEM_SCHEMAS]


def _resolve_choice(answer: str, choices: Sequence[str]) -> str:
    """Map a list number to its schema name; anything else is taken as typed.

    An exact schema name wins over a list position.
    """

    if answer in choices:
        return answer
    if answer.isdigit():
        index = int(answer)
        if 1 <= index <= len(choices):
            return choices[index - 1]
    return answer


def select_schema_for_deletion(
    client: MysqlClient,
    *,
    ask: Callable[[str], str] | None = None,
    confirm: Callable[[str], bool] | None = None,
) -> str:
    """Ask the operator which schema to drop and return the confirmed name.

    The answer is re-checked against the live schema list after confirmation,
    so a typo never reaches ``DROP DATABASE``.
    """

    ask = ask or prompts.ask_text
    confirm = confirm or prompts.confirm

    log = structlog.get_logger()
    choices = user_schemas(client.list_schemas())
    if not choices:
        raise InvalidSchemaError("There are no user schemas on the server to delete.")

    console.print("Existing schemas:")
    for position, name in enumerate(choices, start=1):
        console.print(f"  {position:>2}. {name}", markup=False)

    selected = _resolve_choice(ask("Schema to delete (name or number)"), choices)
    if not confirm(f"Drop schema '{selected}'? This cannot be undone"):
        log.info("schema_deletion_declined", schema=selected)
        raise UserAbortedError(f"Deletion of '{selected}' was declined; nothing was changed.")

    if selected not in choices:
        raise InvalidSchemaError(
            f"'{selected}' is not one of the listed schemas.",
            hint="Pick a name exactly as listed, or pass --fresh NAME.",
        )

    log.info("schema_selected", schema=selected)
    return selected
