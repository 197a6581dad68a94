"""Typer entry-point wiring for the divination CLI."""

from __future__ import annotations

import logging
import os
import random
from typing import List

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import deck as deck_mod
from .. import permutation, trick
from ..cards import Card, InvalidCard, cards_from_codes
from ..session import Phase, SessionConfig, new_session
from ..trick import DisplayMode, InvalidHand
from .render import format_card, format_cards, render_deck, render_session

LOG_LEVEL_ENV = "DIVINATION_LOG_LEVEL"

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()


def setup_logging(level: str) -> None:
    """Route library logging through Rich; safe to call more than once."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _parse_cards(codes: List[str], expected: int) -> list[Card]:
    if len(codes) != expected:
        console.print(f"[red]expected {expected} cards, got {len(codes)}[/red]")
        raise typer.Exit(code=1)
    try:
        return cards_from_codes(codes)
    except InvalidCard as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        os.getenv(LOG_LEVEL_ENV, "WARNING"),
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Five-card divination trick codec."""

    setup_logging(log_level)


@app.command()
def encode(
    cards: List[str] = typer.Argument(..., help="Five card codes in selection order, e.g. 3C 7D QS 2H 9S."),
    mode: DisplayMode = typer.Option(DisplayMode.RANKED, help="Display mode for the four visible cards."),
    hidden_index: int = typer.Option(trick.DEFAULT_HIDDEN_INDEX, min=0, max=trick.HAND_SIZE - 1, help="Slot of the hidden card."),
) -> None:
    """Encode a five-card hand into a hidden card and a four-card arrangement."""

    hand = _parse_cards(cards, trick.HAND_SIZE)
    try:
        result = trick.encode(hand, hidden_index=hidden_index, mode=mode)
    except InvalidHand as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Hidden: {format_card(result.hidden)}")
    console.print(f"Arrangement: {format_cards(result.arrangement)}")
    console.print(f"Rank: {result.rank}")


@app.command()
def decode(
    cards: List[str] = typer.Argument(..., help="The four visible cards in displayed order."),
    mode: DisplayMode = typer.Option(DisplayMode.RANKED, help="Display mode the cards were laid out in."),
    rank: int | None = typer.Option(None, help="Carried rank (required for canonical display)."),
) -> None:
    """Recover the rank and selection order from a visible arrangement."""

    arrangement = _parse_cards(cards, trick.ARRANGEMENT_SIZE)
    try:
        decoding = trick.decode(arrangement, mode, rank)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Rank: {decoding.rank}")
    console.print(f"Selection: {format_cards(decoding.selection)}")


@app.command("rank")
def rank_cli(
    cards: List[str] = typer.Argument(..., help="Cards in presentation order."),
) -> None:
    """Print the permutation rank of the given cards."""

    try:
        order = cards_from_codes(cards)
        value = permutation.rank(order)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Rank: {value} of {permutation.max_rank(len(order))}")


@app.command("unrank")
def unrank_cli(
    value: int = typer.Argument(..., help="Rank to expand."),
    cards: List[str] = typer.Argument(..., help="The canonical card set, any order."),
) -> None:
    """Print the ordering of the given cards designated by a rank."""

    try:
        order = permutation.unrank(value, cards_from_codes(cards))
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Order: {format_cards(order)}")


@app.command("deck")
def deck_cli(
    seed: int | None = typer.Option(None, help="Random seed for a reproducible shuffle."),
) -> None:
    """Print a freshly shuffled deck."""

    shuffled = deck_mod.shuffle(deck_mod.generate(), random.Random(seed))
    console.print(render_deck(shuffled))


@app.command()
def audit(
    trials: int = typer.Option(2000, min=1, help="Number of shuffles to sample."),
    seed: int | None = typer.Option(None, help="Random seed for the audit."),
) -> None:
    """Sample shuffles and report how evenly cards spread over positions."""

    counts = deck_mod.position_frequencies(trials, random.Random(seed))
    statistic = deck_mod.uniformity_chi_square(counts)
    dof = deck_mod.DECK_SIZE * (deck_mod.DECK_SIZE - 1)

    table = Table(title="Shuffle Audit", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", justify="left")
    table.add_column("Value", justify="right")
    table.add_row("Trials", str(trials))
    table.add_row("Expected per cell", f"{trials / deck_mod.DECK_SIZE:.2f}")
    table.add_row("Min cell", str(int(counts.min())))
    table.add_row("Max cell", str(int(counts.max())))
    table.add_row("Chi-square", f"{statistic:.1f}")
    table.add_row("Degrees of freedom", str(dof))
    console.print(table)


_PLAY_HELP = "Enter a card code to select, or: commit, show, reset, deck, quit."


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible sessions (omit for randomness)."),
    mode: DisplayMode = typer.Option(DisplayMode.RANKED, help="Display mode for the four visible cards."),
) -> None:
    """Run a prompt-driven session: pick five cards, commit, reveal."""

    session = new_session(SessionConfig(display_mode=mode, seed=seed))
    console.print(render_deck(session.deck))
    console.print(f"[dim]{_PLAY_HELP}[/dim]")
    while True:
        view = session.view()
        console.print(render_session(view))
        command = typer.prompt(">").strip()
        lowered = command.lower()
        if lowered in {"quit", "exit", "q"}:
            return
        if lowered == "commit":
            try:
                session.commit()
            except InvalidHand as exc:
                console.print(f"[yellow]{exc}[/yellow]")
        elif lowered == "show":
            session.toggle_reveal()
        elif lowered == "reset":
            session.reset()
            console.print(render_deck(session.deck))
        elif lowered == "deck":
            console.print(render_deck(session.deck, session.hand))
        elif view.phase is Phase.SELECTING:
            try:
                card = Card.from_code(command)
            except InvalidCard as exc:
                console.print(f"[red]{exc}[/red]")
                continue
            session.select(card)
        else:
            console.print(f"[dim]{_PLAY_HELP}[/dim]")


def main() -> None:
    """Entry-point for ``python -m divination.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
