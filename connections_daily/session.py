"""
The one owned handle around a day's ``SessionState``.

``DailySession`` ties the pure engine to the outside world: it asks the
provider for today's puzzle, restores or creates the session, saves a
snapshot after every step the engine flags, forwards events to listeners and
reports lifecycle events. Persistence is best-effort: a failing store is
logged and the in-memory state stays authoritative.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Protocol, Tuple

from . import analytics
from .core import engine
from .core.engine import Step
from .core.events import Event
from .core.state import PuzzleDefinition, SessionState, Snapshot
from .errors import CorruptSnapshot, PersistenceError, PersistenceReadFailure
from .snapshot import decode_snapshot, encode_snapshot, storage_key
from .storage import KeyValueStore
from .utils import today_key

log = logging.getLogger(__name__)

Listener = Callable[[Event], None]


class PuzzleProvider(Protocol):
    def get(self, date_key: Optional[str] = None) -> PuzzleDefinition:
        ...


def _load(store: KeyValueStore, puzzle: PuzzleDefinition) -> Tuple[Optional[Snapshot], Optional[SessionState]]:
    key = storage_key(puzzle.date_key)
    try:
        raw = store.get(key)
        if raw is None:
            log.info("No saved game for %s", puzzle.date_key)
            return None, None
        snapshot = decode_snapshot(raw)
        state = engine.restore(snapshot, puzzle)
    except CorruptSnapshot as e:
        log.warning("Discarding saved game for %s: %s", puzzle.date_key, e)
        return None, None
    except PersistenceReadFailure as e:
        log.error("Could not load saved game for %s: %s", puzzle.date_key, e)
        return None, None
    if state is None:
        log.info("Saved game under %s is for a different date. Ignoring.", key)
        return None, None
    return snapshot, state


def load_state(store: KeyValueStore, puzzle: PuzzleDefinition) -> Optional[SessionState]:
    """
    Restore the saved session for ``puzzle``'s date, or None.

    Every read problem (missing key, failing store, corrupt bytes, snapshot for
    another date, impossible state) means "no snapshot".
    """
    return _load(store, puzzle)[1]


def save_state(store: KeyValueStore, state: SessionState) -> bool:
    """Write ``state``'s snapshot. Returns False (after logging) on failure."""
    try:
        store.set(storage_key(state.date_key), encode_snapshot(engine.snapshot_of(state)))
    except PersistenceError as e:
        log.error("Error saving game state for %s: %s", state.date_key, e)
        return False
    log.debug("Game state saved for %s", state.date_key)
    return True


class DailySession:
    def __init__(
        self,
        state: SessionState,
        store: KeyValueStore,
        rng: Optional[random.Random] = None,
        reporter: Optional[analytics.Reporter] = None,
    ):
        self.state = state
        self.store = store
        self.rng = rng
        self.reporter = reporter or analytics.LoggingReporter()
        self._listeners: List[Listener] = []

    @classmethod
    def load(
        cls,
        provider: PuzzleProvider,
        store: KeyValueStore,
        date_key: Optional[str] = None,
        rng: Optional[random.Random] = None,
        reporter: Optional[analytics.Reporter] = None,
    ) -> "DailySession":
        """
        Open today's game: restore the saved session or start (and save) a new one.

        Raises:
            PuzzleLoadError: the provider has no usable puzzle for the date
        """
        date_key = date_key or today_key()
        puzzle = provider.get(date_key)

        snapshot, restored = _load(store, puzzle)
        if snapshot is not None and restored is not None:
            log.info("Restoring game for %s", date_key)
            session = cls(restored, store, rng, reporter)
            # restore may finish a reveal or end an out-of-attempts game
            if engine.snapshot_of(restored) != snapshot:
                session._save()
            was_over = snapshot.is_over
        else:
            step = engine.new_session(puzzle, rng)
            session = cls(step.state, store, rng, reporter)
            session._save()
            was_over = False

        if not was_over:
            analytics.send(session.reporter, analytics.GAME_LOAD_TODAY, date_key)
            if session.state.is_over:
                session._report_end()
        return session

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def toggle(self, word: str) -> Step:
        return self._apply(engine.toggle_word(self.state, word))

    def submit(self) -> Step:
        return self._apply(engine.submit_guess(self.state))

    def shuffle(self) -> Step:
        return self._apply(engine.shuffle_grid(self.state, self.rng))

    def clear_selection(self) -> Step:
        return self._apply(engine.clear_selection(self.state))

    def reset(self) -> Step:
        """Forget today's saved game and start over."""
        try:
            self.store.remove(storage_key(self.state.date_key))
        except PersistenceError as e:
            log.error("Could not remove saved game for %s: %s", self.state.date_key, e)
        return self._apply(engine.new_session(self.state.puzzle, self.rng))

    def _save(self) -> bool:
        return save_state(self.store, self.state)

    def _apply(self, step: Step) -> Step:
        was_over = self.state.is_over
        self.state = step.state
        if step.persist:
            self._save()
        if self.state.is_over and not was_over:
            self._report_end()
        for event in step.events:
            self._notify(event)
        return step

    def _report_end(self) -> None:
        name = analytics.GAME_WIN if self.state.is_win else analytics.GAME_LOSS
        analytics.send(self.reporter, name, self.state.date_key, value=self.state.mistakes)

    def _notify(self, event: Event) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                log.exception("Listener failed on %s", type(event).__name__)
