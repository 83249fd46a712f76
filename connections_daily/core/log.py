from __future__ import annotations
import logging
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "connections_daily"


def setup_logging(level: str = "WARNING", console: Console | None = None) -> logging.Logger:
    """
    Attach a RichHandler to the package logger. Safe to call more than once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console or Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        logger.addHandler(handler)
    return logger
