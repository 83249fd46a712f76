from __future__ import annotations
import orjson, pathlib, typer
from collections import Counter
from rich import print

from ..provider import is_valid_puzzle_entry

app = typer.Typer()


def summarize(puzzles: dict) -> dict:
    levels = Counter()
    invalid = []
    word_lengths = []
    for date_key, entry in puzzles.items():
        if not is_valid_puzzle_entry(entry):
            invalid.append(date_key)
            continue
        for g in entry:
            levels[g["difficulty"]] += 1
            word_lengths += [len(w) for w in g["words"]]
    valid = sorted(k for k in puzzles if k not in invalid)
    return {
        "puzzles": len(puzzles),
        "valid": len(valid),
        "invalid": invalid,
        "first_date": valid[0] if valid else None,
        "last_date": valid[-1] if valid else None,
        "levels": dict(sorted(levels.items())),
        "avg_word_len": sum(word_lengths) / len(word_lengths) if word_lengths else 0.0,
    }


@app.command()
def main(path: str = "puzzles.json"):
    try:
        puzzles = orjson.loads(pathlib.Path(path).read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        print(f"[red]Could not read {path}:[/] {e}")
        raise typer.Exit(1)
    if not isinstance(puzzles, dict):
        print(f"[red]{path} is not a JSON object keyed by date[/]")
        raise typer.Exit(1)
    s = summarize(puzzles)

    print(f"[bold]Puzzles[/]: {s['puzzles']} ({s['valid']} valid)")
    print(f"[bold]Dates[/]: {s['first_date']} … {s['last_date']}")
    print(f"[bold]Group levels[/]: {s['levels']}")
    print(f"[bold]Avg word len[/]: {s['avg_word_len']:.2f}")
    if s["invalid"]:
        print(f"[yellow]Invalid entries[/]: {', '.join(s['invalid'][:10])}")

if __name__ == "__main__":
    app()
