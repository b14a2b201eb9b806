"""Structured logging using structlog.

Provides:
- ISO-8601 timestamps
- Console rendering for development, JSON rendering for deployments
- Logger name and level on every event

Configuration comes from `core.config.AppSettings`:
- PUBRESOLVE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- PUBRESOLVE_LOG_JSON: render events as JSON. Default: disabled

Usage:
    >>> from core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("publication_id_discovered", publication_id=42, url_stub="/en")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from core.config import AppSettings


def _get_log_level(settings: AppSettings) -> int:
    return getattr(logging, settings.log_level.upper(), logging.INFO)


def configure_logging(settings: AppSettings | None = None) -> None:
    """Configure stdlib logging and structlog.

    Safe to call more than once: the root handler is replaced, not stacked.
    """
    settings = settings or AppSettings()
    level = _get_log_level(settings)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    logging.basicConfig(format="%(message)s", level=level, handlers=[handler], force=True)

    renderer: Processor
    if settings.log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # capture_logs() in tests needs uncached loggers
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to `name`."""
    return structlog.get_logger(name)
