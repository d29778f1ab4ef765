"""Structured logging setup for G-Pal.

Routes both structlog loggers and stdlib ``logging`` call sites (uvicorn,
httpx) through the same processor chain. Two output formats:

- ``console``: colored, human-readable output (development default)
- ``json``: one JSON object per line (production / log aggregation)
"""

from __future__ import annotations

import logging
import sys

import structlog

_NOISE_LOGGERS = (
    "uvicorn.access",
    "httpx",
    "httpcore",
)


def _build_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structured logging for the process.

    Args:
        level: Root log level (e.g. "DEBUG", "INFO").
        fmt: ``console`` or ``json``.
    """
    shared = _build_processors()

    if fmt == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        final = [structlog.processors.format_exc_info, renderer]
    else:
        final = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *final],
        foreign_pre_chain=shared,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    for name in _NOISE_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
