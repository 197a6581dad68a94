"""Card abstractions and helpers for the divination trick."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import total_ordering
from typing import Iterable, Iterator, List, Sequence

from . import encoding
from .encoding import InvalidCard


class Suit(str, Enum):
    """Enumeration of the four suits in identity order (spades lowest)."""

    SPADES = "S"
    CLUBS = "C"
    HEARTS = "H"
    DIAMONDS = "D"

    @property
    def ordinal(self) -> int:
        return encoding.SUIT_TO_IDX[self.value]

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


class Rank(IntEnum):
    """Card ranks valued from Ace (1) to King (13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return encoding.RANKS[self.value - 1]


_SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.CLUBS: "♣",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
}


@total_ordering
@dataclass(frozen=True, slots=True)
class Card:
    """Immutable card identity ordered by its identity id.

    ``asset`` is an opaque display reference supplied by the presentation
    layer. It is carried along unchanged and takes no part in equality,
    hashing or ordering.
    """

    suit: Suit
    rank: Rank
    asset: object = field(default=None, compare=False, hash=False, repr=False)

    def __post_init__(self) -> None:
        try:
            suit = Suit(self.suit)
            rank = Rank(self.rank)
        except ValueError as exc:
            raise InvalidCard(f"invalid card ({self.suit!r}, {self.rank!r})") from exc
        object.__setattr__(self, "suit", suit)
        object.__setattr__(self, "rank", rank)

    @classmethod
    def from_id(cls, card_identifier: int, asset: object = None) -> "Card":
        decoded = encoding.decode_id(card_identifier)
        return cls(Suit(encoding.SUITS[decoded.suit_idx]), Rank(decoded.rank), asset)

    @classmethod
    def from_code(cls, code: str, asset: object = None) -> "Card":
        return cls.from_id(encoding.parse_code(code), asset)

    @property
    def id(self) -> int:
        return encoding.identity_id(self.suit.ordinal, int(self.rank))

    @property
    def code(self) -> str:
        return f"{self.rank.label}{self.suit.value}"

    def label(self) -> str:
        """Create a display label such as ``Q♠``."""

        return f"{self.rank.label}{self.suit.symbol}"

    def with_asset(self, asset: object) -> "Card":
        return Card(self.suit, self.rank, asset)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.id < other.id


def identity_id(card: Card) -> int:
    """Return the identity id in [1, 52] for ``card``."""

    return card.id


def unidentify(card_identifier: int) -> Card:
    """Map an identity id back to its card."""

    return Card.from_id(card_identifier)


def iter_full_deck() -> Iterator[Card]:
    """Yield all 52 cards, suit outer and rank inner."""

    for suit in Suit:
        for rank in Rank:
            yield Card(suit, rank)


def canonical_order(cards: Iterable[Card]) -> List[Card]:
    """Return ``cards`` sorted ascending by identity id."""

    return sorted(cards, key=identity_id)


def cards_from_codes(codes: Iterable[str]) -> List[Card]:
    return [Card.from_code(code) for code in codes]


def format_cards(cards: Sequence[Card]) -> str:
    return " ".join(card.label() for card in cards)
