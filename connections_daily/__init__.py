"""
Daily Connections - puzzle session engine, persistence and terminal front-end.
"""

from .core.engine import (
    Step,
    new_session,
    toggle_word,
    submit_guess,
    shuffle_grid,
    clear_selection,
    restore,
    snapshot_of,
)
from .core.events import GuessResult, Outcome
from .core.state import Category, PuzzleDefinition, SessionState, Snapshot
from .provider import JsonPuzzleProvider
from .session import DailySession
from .storage import FileStore, MemoryStore
from .utils import canonicalize

__all__ = [
    "Step",
    "new_session",
    "toggle_word",
    "submit_guess",
    "shuffle_grid",
    "clear_selection",
    "restore",
    "snapshot_of",
    "canonicalize",
    "GuessResult",
    "Outcome",
    "Category",
    "PuzzleDefinition",
    "SessionState",
    "Snapshot",
    "JsonPuzzleProvider",
    "DailySession",
    "FileStore",
    "MemoryStore",
]
