"""Pydantic-based configuration helpers for the database reset tool."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

ENV_PREFIX = "MYSQL_RESET_"


class ResetSettings(BaseModel):
    """Connection details and run options for a single reset."""

    model_config = ConfigDict(populate_by_name=True)

    host: str = Field("127.0.0.1", alias="MYSQL_RESET_HOST")
    port: int = Field(3306, alias="MYSQL_RESET_PORT")
    user: str = Field("root", alias="MYSQL_RESET_USER")
    password: str | None = Field(None, alias="MYSQL_RESET_PASSWORD")
    client: str = Field("mysql", alias="MYSQL_RESET_CLIENT")
    root: Path = Field(default_factory=Path.cwd, alias="MYSQL_RESET_ROOT")
    database: str | None = None
    skip_insert: bool = False
    # None means "ask the operator" when running interactively.
    delete: bool | None = None

    @field_validator("host", "user", "client")
    @classmethod
    def _ensure_not_blank(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("must not be empty")
        return trimmed

    @field_validator("port")
    @classmethod
    def _ensure_port_range(cls, value: int) -> int:
        if not 1 <= value <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return value

    @field_validator("database")
    @classmethod
    def _strip_database(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("schema name must not be empty")
        return trimmed


def _format_fields(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of offending settings."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


def _environment_values(env: Mapping[str, str]) -> dict[str, str]:
    return {key: value for key, value in env.items() if key.startswith(ENV_PREFIX)}


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ResetSettings:
    """Build settings from defaults, ``MYSQL_RESET_*`` variables and *overrides*.

    *overrides* are keyed by field name and win over the environment; keys
    whose value is ``None`` are ignored so unset command-line flags fall
    through to the environment or the defaults.
    """

    values: dict[str, Any] = _environment_values(os.environ if env is None else env)
    for name, value in (overrides or {}).items():
        if value is None:
            continue
        alias = ResetSettings.model_fields[name].alias
        if alias:
            values.pop(alias, None)
        values[name] = value

    return _validate(values)


def _validate(values: Mapping[str, Any]) -> ResetSettings:
    try:
        return ResetSettings.model_validate(values)
    except ValidationError as exc:
        names = {field.alias: name for name, field in ResetSettings.model_fields.items() if field.alias}
        errors = [(names.get(str(error["loc"][0]), str(error["loc"][0])), error["msg"]) for error in exc.errors()]
        invalid = [name for name, _ in errors]
        details = "; ".join(f"{name}: {message}" for name, message in errors)
        raise ConfigError(
            f"Invalid configuration for: {_format_fields(invalid)}",
            detail=details,
        ) from exc


def apply_overrides(settings: ResetSettings, overrides: Mapping[str, Any]) -> ResetSettings:
    """Return a validated copy of *settings* with the non-None *overrides* applied."""

    values = settings.model_dump()
    values.update({name: value for name, value in overrides.items() if value is not None})
    return _validate(values)


@lru_cache()
def get_settings() -> ResetSettings:
    """Fetch and cache settings from environment variables only."""

    return load_settings()
