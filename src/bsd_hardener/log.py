"""Structured logging setup for BSD Hardener."""

import atexit
import logging
import sys
from pathlib import Path
from typing import Optional

import structlog


def configure_logging(level: str = "WARNING", file: Optional[Path] = None) -> None:
    """Configure structlog for the CLI.

    Args:
        level: Minimum level name to emit
        file: Optional log file; stderr is used when omitted
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    if file is not None:
        file.parent.mkdir(parents=True, exist_ok=True)
        stream = open(file, "a", encoding="utf-8")
        atexit.register(stream.close)
        renderer = structlog.processors.JSONRenderer()
    else:
        stream = sys.stderr
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
