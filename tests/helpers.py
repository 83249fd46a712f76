from __future__ import annotations

from connections_daily.core import engine
from connections_daily.core.state import Category, PuzzleDefinition, SessionState

DATE = "2025-01-31"

# Listed out of difficulty order on purpose.
GROUPS = [
    {"category": "Metals", "words": ["IRON", "COPPER", "TIN", "LEAD"], "difficulty": 3},
    {"category": "Fruit", "words": ["APPLE", "PEAR", "PLUM", "FIG"], "difficulty": 1},
    {"category": "Birds", "words": ["CROW", "WREN", "ROBIN", "SWAN"], "difficulty": 4},
    {"category": "Colors", "words": ["RED", "BLUE", "GREEN", "GOLD"], "difficulty": 2},
]

FRUIT = ["APPLE", "PEAR", "PLUM", "FIG"]
COLORS = ["RED", "BLUE", "GREEN", "GOLD"]
METALS = ["IRON", "COPPER", "TIN", "LEAD"]
BIRDS = ["CROW", "WREN", "ROBIN", "SWAN"]

WRONG_GUESSES = [
    ["APPLE", "RED", "IRON", "CROW"],
    ["PEAR", "BLUE", "COPPER", "WREN"],
    ["PLUM", "GREEN", "TIN", "ROBIN"],
    ["FIG", "GOLD", "LEAD", "SWAN"],
]

# Wrong once Fruit is solved: every word is still on the grid.
WRONG_AFTER_FRUIT = ["RED", "TIN", "CROW", "BLUE"]


def select(state: SessionState, words) -> SessionState:
    for w in words:
        state = engine.toggle_word(state, w).state
    return state


def guess(state: SessionState, words) -> engine.Step:
    """Replace the selection with ``words`` and submit."""
    state = engine.clear_selection(state).state
    return engine.submit_guess(select(state, words))


def make_puzzle(date_key: str = DATE) -> PuzzleDefinition:
    return PuzzleDefinition(
        date_key=date_key,
        categories=tuple(Category(g["category"], tuple(g["words"]), g["difficulty"]) for g in GROUPS),
    )
