"""
Snapshot codec: ``Snapshot`` <-> bytes stored under one key per date.

Records are JSON objects:

    {
      "date_key": "2025-01-31",
      "attempts_remaining": 3,
      "solved_category_names": ["Fruit"],
      "grid_words": ["RED", "TIN", ...],
      "tried_guess_records": ["BLUE,FIG,IRON,RED"],
      "is_over": false,
      "is_win": null
    }
"""

from __future__ import annotations

from typing import Any, Dict, List

import orjson

from .core.state import Snapshot
from .errors import CorruptSnapshot

STORAGE_KEY_PREFIX = "connections_state_"


def storage_key(date_key: str) -> str:
    return f"{STORAGE_KEY_PREFIX}{date_key}"


def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    return {
        "date_key": snapshot.date_key,
        "attempts_remaining": snapshot.attempts_remaining,
        "solved_category_names": list(snapshot.solved_category_names),
        "grid_words": list(snapshot.grid_words),
        "tried_guess_records": list(snapshot.tried_guess_records),
        "is_over": snapshot.is_over,
        "is_win": snapshot.is_win if snapshot.is_over else None,
    }


def encode_snapshot(snapshot: Snapshot) -> bytes:
    return orjson.dumps(snapshot_to_dict(snapshot))


def _str_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CorruptSnapshot(f"'{key}' must be a list of strings")
    return value


def snapshot_from_dict(data: Any) -> Snapshot:
    """
    Validate a decoded record and build a ``Snapshot``.

    Raises:
        CorruptSnapshot: a field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise CorruptSnapshot(f"Expected a JSON object, got {type(data).__name__}")

    date_key = data.get("date_key")
    if not isinstance(date_key, str) or not date_key:
        raise CorruptSnapshot("'date_key' must be a non-empty string")

    attempts = data.get("attempts_remaining")
    # bool is an int subclass; true/false is not an attempt count
    if not isinstance(attempts, int) or isinstance(attempts, bool):
        raise CorruptSnapshot("'attempts_remaining' must be an integer")

    is_over = data.get("is_over")
    if not isinstance(is_over, bool):
        raise CorruptSnapshot("'is_over' must be a boolean")

    is_win = data.get("is_win")
    if is_win is not None and not isinstance(is_win, bool):
        raise CorruptSnapshot("'is_win' must be a boolean or null")

    tried = data.get("tried_guess_records", [])
    if not isinstance(tried, list):
        raise CorruptSnapshot("'tried_guess_records' must be a list")

    return Snapshot(
        date_key=date_key,
        attempts_remaining=attempts,
        solved_category_names=tuple(_str_list(data, "solved_category_names")),
        grid_words=tuple(_str_list(data, "grid_words")),
        tried_guess_records=tuple(r for r in tried if isinstance(r, str)),
        is_over=is_over,
        is_win=is_win if is_over else None,
    )


def decode_snapshot(raw: bytes) -> Snapshot:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise CorruptSnapshot(f"Snapshot is not valid JSON: {e}") from e
    return snapshot_from_dict(data)
