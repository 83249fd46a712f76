from __future__ import annotations

import orjson
import pandas as pd
from typer.testing import CliRunner

from connections_daily.cli import app
from connections_daily.cli.explore_data import summarize
from connections_daily.cli.prepare_data import build_puzzles
from connections_daily.snapshot import storage_key

from .helpers import BIRDS, COLORS, DATE, FRUIT, GROUPS, METALS, WRONG_GUESSES

runner = CliRunner()


def play_args(puzzle_file, tmp_path, *extra):
    return ["play", "--puzzle-file", str(puzzle_file), "--state-dir", str(tmp_path / "state"), "--date", DATE, *extra]


def test_play_to_a_win(puzzle_file, tmp_path):
    lines = [" ".join(words) + "\nsubmit" for words in (FRUIT, COLORS, METALS, BIRDS)]
    result = runner.invoke(app, play_args(puzzle_file, tmp_path), input="\n".join(lines) + "\n")
    assert result.exit_code == 0, result.output
    assert "Correct!" in result.output
    assert "Congratulations! You found all groups!" in result.output

    saved = orjson.loads((tmp_path / "state" / f"{storage_key(DATE)}.json").read_bytes())
    assert saved["is_over"] is True and saved["is_win"] is True


def test_play_to_a_loss(puzzle_file, tmp_path):
    lines = ["clear\n" + " ".join(words) + "\nsubmit" for words in WRONG_GUESSES]
    result = runner.invoke(app, play_args(puzzle_file, tmp_path), input="\n".join(lines) + "\n")
    assert result.exit_code == 0, result.output
    assert "Incorrect Guess" in result.output
    assert "Game Over! Better luck next time." in result.output


def test_quit_and_resume(puzzle_file, tmp_path):
    first = runner.invoke(
        app,
        play_args(puzzle_file, tmp_path),
        input="red, blue, green, apple\nsubmit\nsubmit\nquit\n",
    )
    assert first.exit_code == 0, first.output
    assert "One away!" in first.output
    assert "Already guessed!" in first.output
    assert "Progress saved." in first.output

    status = runner.invoke(
        app,
        ["status", "--puzzle-file", str(puzzle_file), "--state-dir", str(tmp_path / "state"), "--date", DATE],
    )
    assert status.exit_code == 0, status.output
    assert "In progress: 0/4 groups found" in status.output
    assert "●●●○" in status.output


def test_play_without_puzzle(puzzle_file, tmp_path):
    result = runner.invoke(
        app,
        ["play", "--puzzle-file", str(puzzle_file), "--state-dir", str(tmp_path), "--date", "1999-01-01"],
    )
    assert result.exit_code == 1
    assert "No puzzle found for today." in result.output


def test_play_with_missing_puzzle_file(tmp_path):
    result = runner.invoke(
        app,
        ["play", "--puzzle-file", str(tmp_path / "nope.json"), "--state-dir", str(tmp_path), "--date", DATE],
    )
    assert result.exit_code == 1
    assert "Failed to load puzzle data." in result.output


def test_bad_date_is_rejected(puzzle_file, tmp_path):
    result = runner.invoke(app, ["play", "--puzzle-file", str(puzzle_file), "--date", "31/01/2025"])
    assert result.exit_code != 0


def test_status_and_reset(puzzle_file, tmp_path):
    state_dir = str(tmp_path / "state")
    result = runner.invoke(app, ["status", "--puzzle-file", str(puzzle_file), "--state-dir", state_dir, "--date", DATE])
    assert result.exit_code == 0
    assert f"No saved game for {DATE}" in result.output

    runner.invoke(app, play_args(puzzle_file, tmp_path), input="quit\n")
    assert (tmp_path / "state" / f"{storage_key(DATE)}.json").exists()

    result = runner.invoke(app, ["reset", "--state-dir", state_dir, "--date", DATE])
    assert result.exit_code == 0
    assert not (tmp_path / "state" / f"{storage_key(DATE)}.json").exists()


def _csv_rows():
    rows = []
    for g in GROUPS:
        for w in g["words"]:
            rows.append({
                "Game ID": 1,
                "Puzzle Date": DATE,
                "Word": w,
                "Group Name": g["category"],
                "Group Level": g["difficulty"],
            })
    # a second game with only three words in one group
    for w in ["A", "B", "C"]:
        rows.append({"Game ID": 2, "Puzzle Date": "2025-02-01", "Word": w,
                     "Group Name": "Short", "Group Level": 0})
    return rows


def test_build_puzzles_from_csv_rows():
    puzzles, skipped = build_puzzles(pd.DataFrame(_csv_rows()))
    assert list(puzzles) == [DATE]
    assert [g["category"] for g in puzzles[DATE]] == ["Fruit", "Colors", "Metals", "Birds"]
    assert skipped == ["2"]


def test_prepare_puzzles_and_explore(tmp_path):
    csv_path = tmp_path / "connections.csv"
    pd.DataFrame(_csv_rows()).to_csv(csv_path, index=False)
    out_path = tmp_path / "puzzles.json"

    result = runner.invoke(app, ["prepare-puzzles", "--csv-path", str(csv_path), "--out-path", str(out_path)])
    assert result.exit_code == 0, result.output
    puzzles = orjson.loads(out_path.read_bytes())
    assert sorted(puzzles[DATE][0]["words"]) == sorted(FRUIT)

    result = runner.invoke(app, ["explore", "--path", str(out_path)])
    assert result.exit_code == 0, result.output
    assert "Puzzles" in result.output


def test_summarize_flags_invalid_entries():
    s = summarize({DATE: GROUPS, "2025-02-01": GROUPS[:2]})
    assert s["valid"] == 1
    assert s["invalid"] == ["2025-02-01"]
    assert s["levels"] == {1: 1, 2: 1, 3: 1, 4: 1}
    assert s["first_date"] == DATE


def test_explore_reports_unreadable_files(tmp_path):
    result = runner.invoke(app, ["explore", "--path", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "Could not read" in result.output

    bad = tmp_path / "bad.json"
    bad.write_text("{oops")
    result = runner.invoke(app, ["explore", "--path", str(bad)])
    assert result.exit_code == 1
    assert "Could not read" in result.output
