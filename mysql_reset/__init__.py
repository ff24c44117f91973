"""MySQL fixture reset tool package initialisation."""

from .config import ResetSettings, load_settings  # noqa: F401
from .errors import ExitCode, ResetError  # noqa: F401
from .logging_config import configure_logging  # noqa: F401
from .mysql_client import MysqlClient  # noqa: F401
from .reset import reset_database  # noqa: F401

__all__ = [
    "ResetSettings",
    "load_settings",
    "ExitCode",
    "ResetError",
    "configure_logging",
    "MysqlClient",
    "reset_database",
]
