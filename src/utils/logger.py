"""Structured logging for trueskill-console.

Log lines go to stderr so stdout carries only the rendered result.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(name: str) -> int:
    """Map a level name to its logging constant; unknown names fall back to info."""
    return LOG_LEVELS.get(name.strip().lower(), logging.INFO)


def configure_logging(*, json_output: bool = False, log_level: str = "info") -> None:
    """Configure structlog for the console.

    Args:
        json_output: Emit JSON lines instead of the coloured console format.
        log_level: Minimum level (debug, info, warning, error).
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
