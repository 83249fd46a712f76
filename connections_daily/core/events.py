"""
Notifications emitted by the engine after each completed state transition.

The presentation layer (the terminal UI, or anything else) reacts to these;
it never writes back into the engine except through the engine operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .state import Category


class GuessResult(str, Enum):
    CORRECT = "CORRECT"
    INCORRECT = "INCORRECT"
    ONE_AWAY = "ONE_AWAY"
    REPEATED = "REPEATED"


@dataclass(frozen=True)
class Outcome:
    """Result of a submitted guess. ``category`` is set only for CORRECT."""

    result: GuessResult
    category: Optional[Category] = None

    @property
    def consumed_attempt(self) -> bool:
        return self.result in (GuessResult.INCORRECT, GuessResult.ONE_AWAY)


@dataclass(frozen=True)
class WordToggled:
    word: str
    selected: bool


@dataclass(frozen=True)
class GuessResolved:
    outcome: Outcome


@dataclass(frozen=True)
class CategorySolved:
    category: Category
    order_index: int


@dataclass(frozen=True)
class AttemptsChanged:
    remaining: int


@dataclass(frozen=True)
class GameEnded:
    is_win: bool


@dataclass(frozen=True)
class CategoriesRevealed:
    categories: Tuple[Category, ...]


@dataclass(frozen=True)
class GridShuffled:
    order: Tuple[str, ...]


Event = Union[
    WordToggled,
    GuessResolved,
    CategorySolved,
    AttemptsChanged,
    GameEnded,
    CategoriesRevealed,
    GridShuffled,
]
