from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional, Tuple, Union

MAX_SELECTED = 4
TOTAL_ATTEMPTS = 4
GROUP_SIZE = 4
GROUP_COUNT = 4

Difficulty = Union[int, float]


@dataclass(frozen=True)
class Category:
    """
    One hidden group of the puzzle.

    ``words`` keeps the provider's order for display; membership checks go
    through ``word_set``.
    """

    name: str
    words: Tuple[str, ...]
    difficulty: Difficulty

    def __post_init__(self) -> None:
        # Accept any sequence from callers, store a tuple.
        object.__setattr__(self, "words", tuple(self.words))

    @property
    def word_set(self) -> FrozenSet[str]:
        return frozenset(self.words)


@dataclass(frozen=True)
class PuzzleDefinition:
    """The four categories published for one calendar date."""

    date_key: str
    categories: Tuple[Category, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "categories", tuple(self.categories))

    @property
    def all_words(self) -> Tuple[str, ...]:
        return tuple(w for c in self.categories for w in c.words)

    def category_named(self, name: str) -> Optional[Category]:
        for c in self.categories:
            if c.name == name:
                return c
        return None


@dataclass(frozen=True)
class SessionState:
    """
    Immutable snapshot of one player's progress on one puzzle.

    Every engine operation returns a new ``SessionState``; the object handed
    in is never modified. Invariants kept by ``core.engine``:

    - ``selected`` is a subset of ``grid_order`` with at most 4 words.
    - ``grid_order`` and the words of ``solved`` partition the puzzle words.
    - ``solved`` is in ascending difficulty.
    - once ``is_over`` is set nothing else changes.
    """

    puzzle: PuzzleDefinition
    grid_order: Tuple[str, ...]
    selected: FrozenSet[str] = field(default_factory=frozenset)
    solved: Tuple[Category, ...] = ()
    attempts_remaining: int = TOTAL_ATTEMPTS
    tried_guesses: FrozenSet[str] = field(default_factory=frozenset)
    is_over: bool = False
    is_win: Optional[bool] = None

    @property
    def date_key(self) -> str:
        return self.puzzle.date_key

    @property
    def unsolved(self) -> Tuple[Category, ...]:
        """Puzzle categories not yet in ``solved``, in puzzle order."""
        names = {c.name for c in self.solved}
        return tuple(c for c in self.puzzle.categories if c.name not in names)

    @property
    def mistakes(self) -> int:
        return TOTAL_ATTEMPTS - self.attempts_remaining

    @property
    def can_submit(self) -> bool:
        return not self.is_over and len(self.selected) == MAX_SELECTED

    def evolve(self, **changes) -> "SessionState":
        return replace(self, **changes)


@dataclass(frozen=True)
class Snapshot:
    """
    Persisted form of a session, one per date key.

    Holds names and words only; ``core.engine.restore`` rebuilds the
    categories from the puzzle rather than trusting this structure.
    """

    date_key: str
    attempts_remaining: int
    solved_category_names: Tuple[str, ...]
    grid_words: Tuple[str, ...]
    tried_guess_records: Tuple[str, ...]
    is_over: bool
    is_win: Optional[bool]
