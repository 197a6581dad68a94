"""Deck generation and uniform shuffling."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Iterator, Mapping

import numpy as np
from numpy.typing import NDArray

from . import encoding
from .cards import Card, iter_full_deck

__all__ = [
    "DECK_SIZE",
    "InvalidDeck",
    "Deck",
    "generate",
    "shuffle",
    "position_frequencies",
    "uniformity_chi_square",
]

DECK_SIZE = encoding.MAX_ID


class InvalidDeck(ValueError):
    """Raised when a deck does not hold each of the 52 identities exactly once."""


@dataclass(frozen=True, slots=True)
class Deck:
    """Ordered presentation of the 52 card identities."""

    cards: tuple[Card, ...]

    def __post_init__(self) -> None:
        cards = tuple(self.cards)
        if len(cards) != DECK_SIZE:
            raise InvalidDeck(f"deck must hold {DECK_SIZE} cards, got {len(cards)}")
        if len({card.id for card in cards}) != DECK_SIZE:
            raise InvalidDeck("deck contains duplicate cards")
        object.__setattr__(self, "cards", cards)

    @classmethod
    def generate(cls, assets: Mapping[Card, Any] | None = None) -> "Deck":
        return generate(assets)

    @classmethod
    def shuffle(cls, deck: "Deck", rng: Any = None) -> "Deck":
        return shuffle(deck, rng)

    def ids(self) -> list[int]:
        return [card.id for card in self.cards]

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]


def generate(assets: Mapping[Card, Any] | None = None) -> Deck:
    """Return the deterministic 52-card deck, suit outer and rank inner.

    ``assets`` optionally maps cards to display references which are attached
    to the generated cards untouched.
    """

    cards = list(iter_full_deck())
    if assets:
        cards = [card.with_asset(assets.get(card)) for card in cards]
    return Deck(tuple(cards))


def shuffle(deck: Deck, rng: Any = None) -> Deck:
    """Return a uniformly shuffled copy of ``deck``.

    ``rng`` only needs a ``shuffle`` method (Fisher-Yates in ``random.Random``).
    The module-level generator is used when omitted.
    """

    source = rng if rng is not None else random
    shuffled = list(deck.cards)
    source.shuffle(shuffled)
    return Deck(tuple(shuffled))


def position_frequencies(trials: int, rng: Any = None, deck: Deck | None = None) -> NDArray[np.int64]:
    """Count how often each identity lands in each position over ``trials`` shuffles.

    Row ``i`` of the result tracks identity id ``i + 1``; column ``j`` is the
    deck position.
    """

    if trials <= 0:
        raise ValueError("trials must be positive")
    base = deck if deck is not None else generate()
    counts = np.zeros((DECK_SIZE, DECK_SIZE), dtype=np.int64)
    positions = np.arange(DECK_SIZE)
    for _ in range(trials):
        ids = np.fromiter((card.id for card in shuffle(base, rng)), dtype=np.int64, count=DECK_SIZE)
        counts[ids - 1, positions] += 1
    return counts


def uniformity_chi_square(counts: NDArray[np.int64]) -> float:
    """Return Pearson's chi-square statistic of ``counts`` against a flat distribution."""

    total = counts.sum(axis=1, keepdims=True)
    expected = total / counts.shape[1]
    return float(((counts - expected) ** 2 / expected).sum())
