"""Logging utilities.

The core only talks to stdlib loggers; the CLI decides where records end up
(`configure_logging` installs a Rich handler on the root logger).
"""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "specsheet-rich"


def get_logger(name: str) -> logging.Logger:
    """Return a logger instance (typically `get_logger(__name__)`)."""

    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    msg: str,
    **kwargs: Any,
) -> None:
    """Log with structured context fields.

    Example:
        log_with_context(
            logger, logging.INFO, "Probe finished",
            url=url,
            attempts=3,
            verified=False,
        )
    """

    logger.log(level, msg, extra=kwargs)


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Install (once) a `RichHandler` on the root logger."""

    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    root.addHandler(handler)
