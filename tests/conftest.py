from __future__ import annotations

import random

import orjson
import pytest

from connections_daily.core.state import PuzzleDefinition
from connections_daily.storage import MemoryStore

from .helpers import DATE, GROUPS, make_puzzle


@pytest.fixture
def puzzle() -> PuzzleDefinition:
    return make_puzzle()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def puzzle_file(tmp_path):
    path = tmp_path / "puzzles.json"
    path.write_bytes(orjson.dumps({DATE: GROUPS}))
    return path


class StaticProvider:
    def __init__(self, puzzle: PuzzleDefinition):
        self.puzzle = puzzle
        self.calls = []

    def get(self, date_key=None):
        self.calls.append(date_key)
        return self.puzzle


class RecordingReporter:
    def __init__(self):
        self.events = []

    def report(self, event, label, **data):
        self.events.append((event, label, data))


@pytest.fixture
def provider(puzzle) -> StaticProvider:
    return StaticProvider(puzzle)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
