"""Play today's puzzle in the terminal, or inspect / reset its saved state."""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.env import get_settings
from ..core.events import (
    AttemptsChanged,
    CategoriesRevealed,
    Event,
    GameEnded,
    GridShuffled,
    GuessResolved,
    GuessResult,
)
from ..core.log import setup_logging
from ..core.state import GROUP_COUNT, MAX_SELECTED, TOTAL_ATTEMPTS, SessionState
from ..errors import NoPuzzleForToday, PersistenceError, ProviderUnavailable
from ..provider import JsonPuzzleProvider
from ..session import DailySession, load_state
from ..snapshot import storage_key
from ..storage import FileStore
from ..utils import find_word, today_key

app = typer.Typer()
console = Console()

WIN_MESSAGE = "Congratulations! You found all groups!"
LOSS_MESSAGE = "Game Over! Better luck next time."

GUESS_MESSAGES = {
    GuessResult.CORRECT: "[green]Correct![/]",
    GuessResult.ONE_AWAY: "[yellow]One away![/]",
    GuessResult.INCORRECT: "[red]Incorrect Guess[/]",
    GuessResult.REPEATED: "[cyan]Already guessed![/]",
}

DIFFICULTY_STYLES = ["black on yellow", "black on green", "white on blue", "white on magenta"]

HELP = (
    "Type a word or its number to select it, several at once are fine. "
    "Commands: [bold]submit[/], [bold]shuffle[/], [bold]clear[/], [bold]quit[/]"
)


def _resolve(puzzle_file: Optional[str], state_dir: Optional[str], date: Optional[str], log_level: Optional[str]):
    settings = get_settings()
    setup_logging(log_level or settings.log_level)
    if date is not None:
        try:
            Date.fromisoformat(date)
        except ValueError:
            raise typer.BadParameter(f"Expected YYYY-MM-DD, got {date!r}", param_hint="--date")
    return (
        JsonPuzzleProvider(puzzle_file or settings.puzzle_file),
        FileStore(state_dir or settings.state_dir),
        date or today_key(),
    )


def render(state: SessionState) -> None:
    for i, category in enumerate(state.solved):
        style = DIFFICULTY_STYLES[min(i, len(DIFFICULTY_STYLES) - 1)]
        console.print(f"[{style}] {escape(category.name)} [/] {escape(', '.join(category.words))}")

    if state.grid_order:
        table = Table(show_header=False, show_lines=True)
        row: List[str] = []
        for n, word in enumerate(state.grid_order, start=1):
            cell = f"{n:>2}. {escape(word)}"
            row.append(f"[reverse]{cell}[/]" if word in state.selected else cell)
            if len(row) == 4:
                table.add_row(*row)
                row = []
        if row:
            table.add_row(*row)
        console.print(table)

    dots = "●" * state.attempts_remaining + "○" * (TOTAL_ATTEMPTS - state.attempts_remaining)
    console.print(f"Mistakes remaining: {dots}  Selected: {len(state.selected)}/{MAX_SELECTED}")


def announce(event: Event) -> None:
    if isinstance(event, GuessResolved):
        console.print(GUESS_MESSAGES[event.outcome.result])
    elif isinstance(event, AttemptsChanged) and event.remaining == 1:
        console.print("[yellow]Last attempt![/]")
    elif isinstance(event, GameEnded):
        console.print(f"[bold green]{WIN_MESSAGE}[/]" if event.is_win else f"[bold red]{LOSS_MESSAGE}[/]")
    elif isinstance(event, CategoriesRevealed) and event.categories:
        console.print("The remaining groups were:")
    elif isinstance(event, GridShuffled):
        console.print("[dim]Shuffled.[/]")


def _open(provider: JsonPuzzleProvider, store: FileStore, date_key: str) -> DailySession:
    try:
        return DailySession.load(provider, store, date_key)
    except NoPuzzleForToday:
        console.print("[red]No puzzle found for today.[/] Please try again later.")
        raise typer.Exit(1)
    except ProviderUnavailable as e:
        console.print(f"[red]Failed to load puzzle data.[/] {e}")
        raise typer.Exit(1)


@app.command()
def play(
    puzzle_file: Optional[str] = None,
    state_dir: Optional[str] = None,
    date: Optional[str] = None,
    log_level: Optional[str] = None,
):
    """
    Play the puzzle for today (or --date). Progress is saved after every
    guess and shuffle, so quitting and coming back resumes the same game.
    """
    provider, store, date_key = _resolve(puzzle_file, state_dir, date, log_level)
    session = _open(provider, store, date_key)
    session.subscribe(announce)

    console.rule(f"[bold]Connections {date_key}")
    if session.state.is_over:
        render(session.state)
        console.print(WIN_MESSAGE if session.state.is_win else LOSS_MESSAGE)
        return
    console.print(HELP)

    while not session.state.is_over:
        render(session.state)
        try:
            raw = console.input("> ")
        except EOFError:
            break
        command = raw.strip().lower()
        if command in ("quit", "q", "exit"):
            break
        if command in ("submit", "s"):
            if not session.state.can_submit:
                console.print(f"Select exactly {MAX_SELECTED} words first.")
            session.submit()
        elif command == "shuffle":
            session.shuffle()
        elif command in ("clear", "deselect"):
            session.clear_selection()
        elif command in ("help", "?"):
            console.print(HELP)
        else:
            for token in raw.replace(",", " ").split():
                word = find_word(session.state.grid_order, token)
                if word is None:
                    console.print(f"[dim]Not on the grid: {escape(token)}[/]")
                    continue
                step = session.toggle(word)
                if not step.events:
                    console.print(f"Already {MAX_SELECTED} selected; deselect one first.")

    if session.state.is_over:
        render(session.state)
    else:
        console.print("[dim]Progress saved.[/]")


@app.command()
def status(
    puzzle_file: Optional[str] = None,
    state_dir: Optional[str] = None,
    date: Optional[str] = None,
    log_level: Optional[str] = None,
):
    """Show the saved game for today (or --date) without changing it."""
    provider, store, date_key = _resolve(puzzle_file, state_dir, date, log_level)
    try:
        puzzle = provider.get(date_key)
    except NoPuzzleForToday:
        console.print("[red]No puzzle found for today.[/]")
        raise typer.Exit(1)
    except ProviderUnavailable as e:
        console.print(f"[red]Failed to load puzzle data.[/] {e}")
        raise typer.Exit(1)

    state = load_state(store, puzzle)
    if state is None:
        console.print(f"No saved game for {date_key}")
        return
    render(state)
    if state.is_over:
        console.print(WIN_MESSAGE if state.is_win else LOSS_MESSAGE)
    else:
        console.print(f"In progress: {len(state.solved)}/{GROUP_COUNT} groups found")


@app.command()
def reset(
    state_dir: Optional[str] = None,
    date: Optional[str] = None,
    log_level: Optional[str] = None,
):
    """Delete the saved game for today (or --date)."""
    _, store, date_key = _resolve(None, state_dir, date, log_level)
    try:
        store.remove(storage_key(date_key))
    except PersistenceError as e:
        console.print(f"[red]Could not remove saved game:[/] {e}")
        raise typer.Exit(1)
    console.print(f"[green]Removed[/] saved game for {date_key}")


if __name__ == "__main__":
    app()
