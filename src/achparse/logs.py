"""structlog setup shared by the library, the CLI and scripts."""

from __future__ import annotations

import logging
import sys

import structlog

PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
]


def _configure_structlog() -> None:
    structlog.configure(
        processors=PROCESSORS,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger backed by stdlib logging, so levels and handlers follow the host app.

    An application that already configured structlog keeps its own setup.
    """
    if not structlog.is_configured():
        _configure_structlog()
    return structlog.get_logger(name)


def configure_logging(level: str = "WARNING") -> None:
    """Route structlog through stdlib logging on stderr at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    _configure_structlog()
