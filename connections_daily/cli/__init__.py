"""
CLI commands for Daily Connections.
"""

import typer

from .play import play, status, reset
from .prepare_data import main as prepare_puzzles
from .explore_data import main as explore

app = typer.Typer(help="Daily word-grouping puzzle.")
app.command()(play)
app.command()(status)
app.command()(reset)
app.command("prepare-puzzles")(prepare_puzzles)
app.command("explore")(explore)

__all__ = [
    "app",
    "play",
    "status",
    "reset",
    "prepare_puzzles",
    "explore",
]
