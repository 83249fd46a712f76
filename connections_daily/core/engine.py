"""
Puzzle session rules.

Every operation is a pure function of a ``SessionState``: it returns a
``Step`` holding the next state, the events describing what changed, the
guess outcome where there is one, and whether the step must be saved.
Invalid input is never an error; it yields an empty step with the same state.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..errors import InvariantViolation
from ..utils import canonicalize, shuffled
from .events import (
    AttemptsChanged,
    CategoriesRevealed,
    CategorySolved,
    Event,
    GameEnded,
    GridShuffled,
    GuessResolved,
    GuessResult,
    Outcome,
    WordToggled,
)
from .state import (
    GROUP_COUNT,
    GROUP_SIZE,
    MAX_SELECTED,
    TOTAL_ATTEMPTS,
    Category,
    PuzzleDefinition,
    SessionState,
    Snapshot,
)


@dataclass(frozen=True)
class Step:
    state: SessionState
    events: Tuple[Event, ...] = ()
    outcome: Optional[Outcome] = None
    persist: bool = False


def _by_difficulty(categories: Iterable[Category]) -> Tuple[Category, ...]:
    # sorted() is stable: equal difficulties keep puzzle order
    return tuple(sorted(categories, key=lambda c: c.difficulty))


def _reveal(state: SessionState) -> Tuple[SessionState, Tuple[Category, ...]]:
    """Move every unsolved category into ``solved`` (terminal loss)."""
    revealed = _by_difficulty(state.unsolved)
    if not revealed:
        return state, ()
    return (
        state.evolve(
            solved=_by_difficulty(state.solved + revealed),
            grid_order=(),
            selected=frozenset(),
        ),
        revealed,
    )


def new_session(puzzle: PuzzleDefinition, rng: Optional[random.Random] = None) -> Step:
    """
    Start a fresh game for ``puzzle`` with all 16 words in random order.

    The step is flagged for persistence so the initial layout is saved
    immediately.
    """
    state = SessionState(
        puzzle=puzzle,
        grid_order=tuple(shuffled(puzzle.all_words, rng)),
        attempts_remaining=TOTAL_ATTEMPTS,
    )
    return Step(state, persist=True)


def toggle_word(state: SessionState, word: str) -> Step:
    """
    Select or deselect one grid word.

    Ignored when the game is over, when the word is not on the grid, or when
    four words are already selected and ``word`` is not one of them. The
    player has to deselect explicitly; nothing is evicted.
    """
    if state.is_over or word not in state.grid_order:
        return Step(state)
    if word in state.selected:
        new = state.evolve(selected=state.selected - {word})
        return Step(new, (WordToggled(word, False),))
    if len(state.selected) >= MAX_SELECTED:
        return Step(state)
    new = state.evolve(selected=state.selected | {word})
    return Step(new, (WordToggled(word, True),))


def clear_selection(state: SessionState) -> Step:
    if state.is_over or not state.selected:
        return Step(state)
    events = tuple(WordToggled(w, False) for w in sorted(state.selected))
    return Step(state.evolve(selected=frozenset()), events)


def _matching_category(state: SessionState) -> Optional[Category]:
    # Word sets are disjoint, so at most one unsolved category can match.
    for category in state.unsolved:
        if category.word_set == state.selected:
            return category
    return None


def is_one_away(selection: Iterable[str], categories: Iterable[Category]) -> bool:
    """Exactly 3 of the 4 selected words belong to one of ``categories``."""
    chosen = frozenset(selection)
    return any(len(chosen & c.word_set) == GROUP_SIZE - 1 for c in categories)


def submit_guess(state: SessionState) -> Step:
    """
    Evaluate the current 4-word selection.

    - already tried incorrect combination: REPEATED, nothing changes
    - exact match of an unsolved category: CORRECT, the words leave the grid,
      no attempt is used; the fourth solved category wins the game
    - otherwise ONE_AWAY or INCORRECT: one attempt is used and the
      combination is remembered; the selection stays so it can be adjusted.
      Running out of attempts ends the game and reveals the rest.
    """
    if not state.can_submit:
        return Step(state)

    record = canonicalize(state.selected)
    if record in state.tried_guesses:
        outcome = Outcome(GuessResult.REPEATED)
        return Step(state, (GuessResolved(outcome),), outcome)

    category = _matching_category(state)
    if category is not None:
        outcome = Outcome(GuessResult.CORRECT, category)
        solved = _by_difficulty(state.solved + (category,))
        new = state.evolve(
            grid_order=tuple(w for w in state.grid_order if w not in category.word_set),
            selected=frozenset(),
            solved=solved,
        )
        events: List[Event] = [
            GuessResolved(outcome),
            CategorySolved(category, solved.index(category)),
        ]
        if len(solved) == GROUP_COUNT:
            new = new.evolve(is_over=True, is_win=True)
            events.append(GameEnded(True))
        return Step(new, tuple(events), outcome, persist=True)

    result = GuessResult.ONE_AWAY if is_one_away(state.selected, state.unsolved) else GuessResult.INCORRECT
    outcome = Outcome(result)
    remaining = max(0, state.attempts_remaining - 1)
    new = state.evolve(
        attempts_remaining=remaining,
        tried_guesses=state.tried_guesses | {record},
    )
    events = [GuessResolved(outcome), AttemptsChanged(remaining)]
    if remaining == 0:
        new, revealed = _reveal(new.evolve(is_over=True, is_win=False))
        events.append(GameEnded(False))
        events.append(CategoriesRevealed(revealed))
    return Step(new, tuple(events), outcome, persist=True)


def shuffle_grid(state: SessionState, rng: Optional[random.Random] = None) -> Step:
    """Re-permute the grid; the selected words stay selected."""
    if state.is_over or not state.grid_order:
        return Step(state)
    order = tuple(shuffled(state.grid_order, rng))
    return Step(state.evolve(grid_order=order), (GridShuffled(order),), persist=True)


def snapshot_of(state: SessionState) -> Snapshot:
    """Persisted form of ``state``. The current selection is not saved."""
    return Snapshot(
        date_key=state.date_key,
        attempts_remaining=state.attempts_remaining,
        solved_category_names=tuple(c.name for c in state.solved),
        grid_words=state.grid_order,
        tried_guess_records=tuple(sorted(state.tried_guesses)),
        is_over=state.is_over,
        is_win=state.is_win if state.is_over else None,
    )


def restore(snapshot: Snapshot, puzzle: PuzzleDefinition) -> Optional[SessionState]:
    """
    Rebuild a session from ``snapshot``.

    Returns None when the snapshot belongs to another date. Solved categories
    and the grid are derived from ``puzzle``, using the snapshot only for
    membership and word order, so the partition invariant always holds:
    unknown or duplicated names and words are dropped, and unsolved words the
    snapshot forgot are appended in puzzle order.

    Raises:
        InvariantViolation: the snapshot claims a win with fewer than four
            solved categories.
    """
    if snapshot.date_key != puzzle.date_key:
        return None

    names = set(snapshot.solved_category_names)
    solved = _by_difficulty(c for c in puzzle.categories if c.name in names)
    solved_words = {w for c in solved for w in c.words}
    open_words = [w for w in puzzle.all_words if w not in solved_words]
    open_set = set(open_words)

    grid: List[str] = []
    for w in snapshot.grid_words:
        if w in open_set and w not in grid:
            grid.append(w)
    grid.extend(w for w in open_words if w not in grid)

    is_over = bool(snapshot.is_over)
    is_win = snapshot.is_win if is_over else None
    if is_over and is_win is None:
        is_win = len(solved) == GROUP_COUNT
    if is_over and is_win and len(solved) < GROUP_COUNT:
        raise InvariantViolation(
            f"Snapshot for {snapshot.date_key} claims a win with {len(solved)} solved categories"
        )

    state = SessionState(
        puzzle=puzzle,
        grid_order=tuple(grid),
        solved=solved,
        attempts_remaining=min(max(snapshot.attempts_remaining, 0), TOTAL_ATTEMPTS),
        tried_guesses=frozenset(snapshot.tried_guess_records),
        is_over=is_over,
        is_win=is_win,
    )

    if not state.is_over:
        if len(solved) == GROUP_COUNT:
            state = state.evolve(is_over=True, is_win=True)
        elif state.attempts_remaining == 0:
            state = state.evolve(is_over=True, is_win=False)
    if state.is_over and not state.is_win:
        # Snapshots saved before the reveal finished still list unsolved groups.
        state, _ = _reveal(state)
    return state
