# minyan/log.py
"""
Logging setup: stdlib `logging` rendered through rich.

Level comes from the argument, else MINYAN_LOG_LEVEL, else WARNING.
`get_logger` configures on first use so library callers get sane defaults.
"""
from __future__ import annotations
import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_configured = False

def setup_logging(level: Optional[str] = None, *, force: bool = False) -> None:
    global _configured
    if _configured and not force:
        return
    if level is None:
        level = os.getenv("MINYAN_LOG_LEVEL", "WARNING")
    log_level = LOG_LEVELS.get(level.strip().upper(), logging.WARNING)

    logger = logging.getLogger("minyan")
    logger.setLevel(log_level)
    logger.handlers.clear()
    # diagnostics go to stderr; stdout is the command output
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True

def get_logger(name: str) -> logging.Logger:
    if not _configured:
        setup_logging()
    return logging.getLogger(name)
