"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Suit
from ..deck import Deck
from ..session import Phase, SessionView

_SUIT_COLOURS = {
    Suit.SPADES: "cyan",
    Suit.CLUBS: "green",
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "magenta",
}

DECK_COLUMNS = 13


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    colour = _SUIT_COLOURS[card.suit]
    return f"[{colour}]{card.label()}[/{colour}]"


def format_cards(cards: Iterable[Card]) -> str:
    labels = [format_card(card) for card in cards]
    return " ".join(labels) if labels else "—"


def _numbered_row(cards: Sequence[Card]) -> Table:
    table = Table(box=box.SIMPLE, show_header=True)
    for idx, _ in enumerate(cards, start=1):
        table.add_column(str(idx), justify="center")
    table.add_row(*(format_card(card) for card in cards))
    return table


def render_deck(deck: Deck, chosen: Iterable[Card] = ()) -> RenderableType:
    """Return the deck laid out in rows with chosen cards dimmed."""

    picked = set(chosen)
    grid = Table.grid(padding=(0, 1))
    for _ in range(DECK_COLUMNS):
        grid.add_column(justify="center")
    cells = [
        f"[dim strike]{card.label()}[/dim strike]" if card in picked else format_card(card)
        for card in deck
    ]
    for start in range(0, len(cells), DECK_COLUMNS):
        grid.add_row(*cells[start : start + DECK_COLUMNS])
    return Panel(grid, title="Deck", border_style="blue", box=box.ROUNDED)


def render_session(view: SessionView) -> RenderableType:
    """Return a panel describing the session snapshot."""

    if view.phase is Phase.SELECTING:
        body = Group(
            f"Selected: [bold]{view.selected}[/bold] / {view.hand_size}",
            _numbered_row(view.hand) if view.hand else "[dim]No cards chosen yet[/dim]",
        )
        return Panel(body, title="Your Selection", border_style="yellow", box=box.ROUNDED)

    hidden = format_card(view.hidden) if view.hidden is not None else "[bold]?[/bold]"
    body = Group(
        f"Card to guess: {hidden}",
        f"Rank: [bold]{view.rank}[/bold]",
        _numbered_row(view.arrangement),
    )
    return Panel(body, title="Four Cards", border_style="green", box=box.ROUNDED)
