"""Shared logger initialization for the CLI and the loader.

Usage:
    from todotree.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"  # rich handler already adds time & level


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Idempotently configure root logger with a nicer handler."""
    root = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root.handlers):
        # Assume already configured
        return
    level = _coerce_level(level)
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False, show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.setLevel(level)
    root.addHandler(handler)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger."""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
