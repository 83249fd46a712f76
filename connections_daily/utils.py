"""
Small helpers shared by the engine, the session handle and the CLI.
"""

from __future__ import annotations

import random
from datetime import date
from typing import Iterable, List, Optional, Sequence

GUESS_KEY_SEPARATOR = ","


def canonicalize(words: Iterable[str]) -> str:
    """
    Order-independent key for a guess.

    ["B", "A"] and ["A", "B"] produce the same key, so a repeated incorrect
    combination is recognised however it was clicked.
    """
    return GUESS_KEY_SEPARATOR.join(sorted(words))


def shuffled(words: Sequence[str], rng: Optional[random.Random] = None) -> List[str]:
    """Return a uniformly random permutation of ``words`` (Fisher-Yates)."""
    out = list(words)
    (rng or random).shuffle(out)
    return out


def today_key(today: Optional[date] = None) -> str:
    """Local calendar date as ``YYYY-MM-DD``."""
    return (today or date.today()).isoformat()


def normalize_word(word: str) -> str:
    return word.strip().upper()


def find_word(candidates: Sequence[str], text: str) -> Optional[str]:
    """
    Resolve player input against the grid.

    Accepts an exact word, a case-insensitive word, or a 1-based position.
    """
    text = text.strip()
    if not text:
        return None
    if text in candidates:
        return text
    if text.isdigit():
        idx = int(text) - 1
        if 0 <= idx < len(candidates):
            return candidates[idx]
        return None
    wanted = normalize_word(text)
    for w in candidates:
        if normalize_word(w) == wanted:
            return w
    return None
