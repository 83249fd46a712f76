"""
Puzzle source: a JSON file mapping calendar dates to four categories.

    {
      "2025-01-31": [
        {"category": "Fruit", "words": ["APPLE", "PEAR", "PLUM", "FIG"], "difficulty": 1},
        ...
      ]
    }
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

from .core.state import GROUP_COUNT, GROUP_SIZE, Category, PuzzleDefinition
from .errors import NoPuzzleForToday, ProviderUnavailable
from .utils import today_key

log = logging.getLogger(__name__)


def is_valid_group(group: Any) -> bool:
    if not isinstance(group, dict):
        return False
    name = group.get("category")
    words = group.get("words")
    difficulty = group.get("difficulty")
    return (
        isinstance(name, str)
        and bool(name.strip())
        and isinstance(words, list)
        and len(words) == GROUP_SIZE
        and all(isinstance(w, str) and w for w in words)
        and len(set(words)) == GROUP_SIZE
        and isinstance(difficulty, (int, float))
        and not isinstance(difficulty, bool)
    )


def is_valid_puzzle_entry(entry: Any) -> bool:
    """Exactly 4 groups, each a named category of 4 distinct words with a numeric difficulty."""
    return isinstance(entry, list) and len(entry) == GROUP_COUNT and all(is_valid_group(g) for g in entry)


def puzzle_from_entry(date_key: str, entry: Any) -> PuzzleDefinition:
    if not is_valid_puzzle_entry(entry):
        raise NoPuzzleForToday(date_key, "invalid entry")
    return PuzzleDefinition(
        date_key=date_key,
        categories=tuple(
            Category(name=g["category"], words=tuple(g["words"]), difficulty=g["difficulty"])
            for g in entry
        ),
    )


class JsonPuzzleProvider:
    """Reads every puzzle from one JSON file; the file is parsed once."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._puzzles: Optional[Dict[str, Any]] = None

    def load_all(self) -> Dict[str, Any]:
        """
        Raises:
            ProviderUnavailable: the file is missing, unreadable or not a JSON object
        """
        if self._puzzles is None:
            try:
                data = orjson.loads(self.path.read_bytes())
            except OSError as e:
                raise ProviderUnavailable(f"Could not read puzzle file {self.path}: {e}") from e
            except orjson.JSONDecodeError as e:
                raise ProviderUnavailable(f"Puzzle file {self.path} is not valid JSON: {e}") from e
            if not isinstance(data, dict):
                raise ProviderUnavailable(f"Puzzle file {self.path} must contain a JSON object keyed by date")
            self._puzzles = data
            log.debug("Loaded %d puzzle entries from %s", len(data), self.path)
        return self._puzzles

    def get(self, date_key: Optional[str] = None) -> PuzzleDefinition:
        """
        Puzzle for ``date_key`` (today's local date by default).

        Raises:
            ProviderUnavailable: the source cannot be read
            NoPuzzleForToday: no valid entry exists for the date
        """
        date_key = date_key or today_key()
        puzzles = self.load_all()
        if date_key not in puzzles:
            raise NoPuzzleForToday(date_key)
        return puzzle_from_entry(date_key, puzzles[date_key])
