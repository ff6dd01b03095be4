"""Structured logging for signedcookie.

Library loggers hand their events to the standard library ``logging`` tree
under ``signedcookie``. Until the host configures that tree, or calls
``configure_logging``, nothing is written anywhere.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

ROOT_LOGGER_NAME = "signedcookie"

_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())

_handler: Optional[logging.Handler] = None


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.wrap_logger(
        logging.getLogger(name or ROOT_LOGGER_NAME),
        processors=_SHARED_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def configure_logging(*, level: str = "INFO", fmt: str = "console") -> None:
    """Render signedcookie events to stderr.

    Calling it again replaces the previous handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: ``console`` for human readable lines, ``json`` for one object per line
    """
    global _handler

    if fmt.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _handler = handler


def reset_logging() -> None:
    """Undo ``configure_logging``."""
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        root.removeHandler(_handler)
        _handler = None
    root.setLevel(logging.NOTSET)
