"""
Lifecycle reporting. Fire-and-forget: a failing reporter never affects play.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

log = logging.getLogger(__name__)

GAME_LOAD_TODAY = "game_load_today"
GAME_WIN = "game_win"
GAME_LOSS = "game_loss"


class Reporter(Protocol):
    def report(self, event: str, label: str, **data: Any) -> None:
        ...


class LoggingReporter:
    """Default reporter: writes each lifecycle event to the log."""

    def report(self, event: str, label: str, **data: Any) -> None:
        log.info("analytics %s label=%s %s", event, label, data)


def send(reporter: Reporter, event: str, label: str, **data: Any) -> None:
    try:
        reporter.report(event, label, **data)
    except Exception:
        log.warning("Reporter failed for %s", event, exc_info=True)
