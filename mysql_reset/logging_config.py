"""Structlog configuration helpers for structured logging."""

from __future__ import annotations

import logging
import sys

import structlog

LOG_LEVEL = logging.INFO


def configure_logging(*, verbose: bool = False, json_logs: bool = False) -> None:
    """Configure structlog to emit console or JSON-formatted logs on stderr."""

    timestamper = structlog.processors.TimeStamper(fmt="iso")
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        stream=sys.stderr,
        format="%(message)s",
    )
