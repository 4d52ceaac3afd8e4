"""Structured logging for the client and CLI, using structlog.

Log output goes to stderr so that ``--json`` output on stdout stays
machine-readable. Every entry carries the CLI command bound with
:func:`command_context`, when there is one.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from urban_dict_core.config.settings import Settings

# Loggers that report every upstream request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def configure_logging(settings: Settings, stream: TextIO | None = None) -> None:
    """Route structlog and stdlib logging through one formatter.

    ``settings.log_format`` picks JSON or console rendering and
    ``settings.log_level`` the root level. ``stream`` defaults to stderr.
    """
    stream = stream if stream is not None else sys.stderr
    shared_processors: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    level = _resolve_level(settings.log_level)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_command_context(command: str, **extra: object) -> None:
    """Bind the CLI command (and any extras) to subsequent log entries."""
    bind_contextvars(command=command, **extra)


def clear_command_context() -> None:
    """Clear all bound context variables."""
    clear_contextvars()


@contextmanager
def command_context(command: str, **extra: object) -> Iterator[None]:
    """Bind the command for the duration of the block, then clear it."""
    bind_command_context(command, **extra)
    try:
        yield
    finally:
        clear_command_context()


def _resolve_level(level_name: str) -> int:
    """Convert a level name to a logging level, falling back to INFO."""
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
