from __future__ import annotations

import copy

import orjson
import pytest

from connections_daily.errors import NoPuzzleForToday, ProviderUnavailable, PuzzleLoadError
from connections_daily.provider import JsonPuzzleProvider, is_valid_puzzle_entry

from .helpers import DATE, GROUPS


def test_get_builds_the_puzzle(puzzle_file):
    puzzle = JsonPuzzleProvider(puzzle_file).get(DATE)
    assert puzzle.date_key == DATE
    assert [c.name for c in puzzle.categories] == ["Metals", "Fruit", "Birds", "Colors"]
    assert puzzle.categories[1].words == ("APPLE", "PEAR", "PLUM", "FIG")
    assert puzzle.categories[1].difficulty == 1
    assert len(puzzle.all_words) == 16


def test_missing_date(puzzle_file):
    with pytest.raises(NoPuzzleForToday) as exc:
        JsonPuzzleProvider(puzzle_file).get("1999-01-01")
    assert exc.value.date_key == "1999-01-01"


def test_defaults_to_today(puzzle_file, monkeypatch):
    monkeypatch.setattr("connections_daily.provider.today_key", lambda: DATE)
    assert JsonPuzzleProvider(puzzle_file).get().date_key == DATE


def test_file_is_read_once(puzzle_file):
    provider = JsonPuzzleProvider(puzzle_file)
    provider.get(DATE)
    puzzle_file.unlink()
    assert provider.get(DATE).date_key == DATE


def test_missing_file(tmp_path):
    with pytest.raises(ProviderUnavailable):
        JsonPuzzleProvider(tmp_path / "nope.json").get(DATE)


def test_bad_json(tmp_path):
    path = tmp_path / "puzzles.json"
    path.write_text("{oops")
    with pytest.raises(ProviderUnavailable):
        JsonPuzzleProvider(path).get(DATE)


def test_top_level_must_be_an_object(tmp_path):
    path = tmp_path / "puzzles.json"
    path.write_bytes(orjson.dumps([GROUPS]))
    with pytest.raises(PuzzleLoadError):
        JsonPuzzleProvider(path).get(DATE)


def _broken(mutate):
    groups = copy.deepcopy(GROUPS)
    mutate(groups)
    return groups


@pytest.mark.parametrize(
    "entry",
    [
        None,
        {},
        GROUPS[:3],
        GROUPS + GROUPS[:1],
        _broken(lambda g: g[0].update(category="")),
        _broken(lambda g: g[0].update(category=5)),
        _broken(lambda g: g[0].update(words=["A", "B", "C"])),
        _broken(lambda g: g[0].update(words=["A", "A", "B", "C"])),
        _broken(lambda g: g[0].update(words=["A", "B", "C", 4])),
        _broken(lambda g: g[0].update(difficulty="1")),
        _broken(lambda g: g[0].update(difficulty=True)),
        _broken(lambda g: g[0].pop("difficulty")),
    ],
)
def test_invalid_entries(entry, tmp_path):
    assert not is_valid_puzzle_entry(entry)
    path = tmp_path / "puzzles.json"
    path.write_bytes(orjson.dumps({DATE: entry}))
    with pytest.raises(NoPuzzleForToday):
        JsonPuzzleProvider(path).get(DATE)


def test_float_difficulty_is_accepted():
    assert is_valid_puzzle_entry(_broken(lambda g: g[0].update(difficulty=2.5)))
