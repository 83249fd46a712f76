from __future__ import annotations
import pandas as pd, orjson, pathlib, typer
from rich import print

from ..provider import is_valid_puzzle_entry

app = typer.Typer()

COLUMNS = ["Game ID", "Puzzle Date", "Word", "Group Name", "Group Level"]


def build_puzzles(df: pd.DataFrame) -> tuple[dict, list[str]]:
    """
    Turn one-row-per-word CSV data into {date: [group, ...]}.
    Returns the puzzles and the game ids that were skipped.
    """
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {missing}")

    df = df.dropna(subset=["Puzzle Date", "Word", "Group Name", "Group Level"]).copy()
    df["Puzzle Date"] = pd.to_datetime(df["Puzzle Date"]).dt.date

    puzzles: dict = {}
    skipped: list[str] = []
    for gid, g in df.groupby("Game ID", sort=True):
        date_key = str(min(g["Puzzle Date"]))  # one per puzzle
        groups = []
        for name, gg in g.groupby("Group Name", sort=False):
            groups.append({
                "category": str(name),
                "words": [str(w) for w in gg["Word"].tolist()],
                "difficulty": int(gg["Group Level"].iloc[0]),
            })
        groups.sort(key=lambda x: x["difficulty"])
        if date_key in puzzles or not is_valid_puzzle_entry(groups):
            skipped.append(str(gid))
            continue
        puzzles[date_key] = groups
    return dict(sorted(puzzles.items())), skipped


@app.command()
def main(csv_path: str = "data/raw/connections.csv",
         out_path: str = "puzzles.json"):
    df = pd.read_csv(csv_path)
    try:
        puzzles, skipped = build_puzzles(df)
    except ValueError as e:
        print(f"[red]{e}[/]")
        raise typer.Exit(1)

    out = pathlib.Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(orjson.dumps(puzzles, option=orjson.OPT_INDENT_2))

    print(f"[green]Wrote[/] {len(puzzles)} puzzles to {out}")
    if skipped:
        print(f"[yellow]Skipped[/] {len(skipped)} malformed games: {', '.join(skipped[:10])}")

if __name__ == "__main__":
    app()
