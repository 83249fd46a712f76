"""
Exceptions raised by the puzzle provider and the persistence layer.

Only ``PuzzleLoadError`` is meant to reach the player. Persistence errors are
caught by ``DailySession``, logged, and play continues from memory.
"""


class ConnectionsError(Exception):
    """Base class for every error raised by this package."""


class PuzzleLoadError(ConnectionsError):
    """Today's puzzle could not be loaded; no session can be created."""


class ProviderUnavailable(PuzzleLoadError):
    """The puzzle source could not be read or parsed at all."""


class NoPuzzleForToday(PuzzleLoadError):
    """The puzzle source was read but has no valid entry for the date."""

    def __init__(self, date_key: str, reason: str = "missing"):
        super().__init__(f"No valid puzzle for {date_key} ({reason})")
        self.date_key = date_key
        self.reason = reason


class PersistenceError(ConnectionsError):
    """The snapshot store failed."""


class PersistenceWriteFailure(PersistenceError):
    """Saving a snapshot failed."""


class PersistenceReadFailure(PersistenceError):
    """Loading a snapshot failed."""


class CorruptSnapshot(PersistenceReadFailure):
    """A stored snapshot is not a structurally valid session record."""


class InvariantViolation(CorruptSnapshot):
    """A snapshot decodes but describes an impossible session."""
