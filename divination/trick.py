"""Five-card trick encoding built on the permutation codec."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from . import permutation
from .cards import Card, canonical_order, identity_id

__all__ = [
    "HAND_SIZE",
    "ARRANGEMENT_SIZE",
    "DEFAULT_HIDDEN_INDEX",
    "DisplayMode",
    "InvalidHand",
    "TrickResult",
    "Decoding",
    "TrickEncoder",
    "encode",
    "decode",
]

HAND_SIZE: Final[int] = 5
ARRANGEMENT_SIZE: Final[int] = HAND_SIZE - 1
DEFAULT_HIDDEN_INDEX: Final[int] = HAND_SIZE - 1


class DisplayMode(str, Enum):
    """How the four visible cards are laid out.

    ``CANONICAL`` always shows them ascending by identity id and carries the
    rank separately. ``RANKED`` lays them out in the order designated by the
    rank, so the arrangement alone is enough to recover it.
    """

    CANONICAL = "canonical"
    RANKED = "ranked"


class InvalidHand(ValueError):
    """Raised when a hand is not exactly five distinct cards."""


@dataclass(frozen=True, slots=True)
class TrickResult:
    """Outcome of encoding a five-card hand."""

    hidden: Card
    arrangement: tuple[Card, ...]
    rank: int
    mode: DisplayMode
    selection: tuple[Card, ...]


@dataclass(frozen=True, slots=True)
class Decoding:
    """Information recovered from a visible arrangement."""

    rank: int
    selection: tuple[Card, ...]


def _validate_hand(hand: Sequence[Card], hidden_index: int) -> None:
    if len(hand) != HAND_SIZE:
        raise InvalidHand(f"hand must hold {HAND_SIZE} cards, got {len(hand)}")
    if len({card.id for card in hand}) != HAND_SIZE:
        raise InvalidHand("hand contains duplicate cards")
    if not 0 <= hidden_index < HAND_SIZE:
        raise InvalidHand(f"hidden index {hidden_index} out of range")


def encode(
    hand: Sequence[Card],
    *,
    hidden_index: int = DEFAULT_HIDDEN_INDEX,
    mode: DisplayMode = DisplayMode.RANKED,
) -> TrickResult:
    """Split ``hand`` into the hidden card and the four-card arrangement.

    The rank is taken from the selection order of the remaining four relative
    to their ascending-id order.
    """

    _validate_hand(hand, hidden_index)
    hidden = hand[hidden_index]
    selection = tuple(card for idx, card in enumerate(hand) if idx != hidden_index)
    sorted_four = canonical_order(selection)
    value = permutation.rank(selection, sorted_four, key=identity_id)
    if DisplayMode(mode) is DisplayMode.RANKED:
        arrangement = tuple(permutation.unrank(value, sorted_four, key=identity_id))
    else:
        arrangement = tuple(sorted_four)
    return TrickResult(
        hidden=hidden,
        arrangement=arrangement,
        rank=value,
        mode=DisplayMode(mode),
        selection=selection,
    )


def decode(
    arrangement: Sequence[Card],
    mode: DisplayMode = DisplayMode.RANKED,
    rank: int | None = None,
) -> Decoding:
    """Recover the rank and the original selection order from ``arrangement``.

    Under ``CANONICAL`` display the arrangement carries no order information,
    so the rank produced at encode time must be passed in.
    """

    if len(arrangement) != ARRANGEMENT_SIZE:
        raise ValueError(f"arrangement must hold {ARRANGEMENT_SIZE} cards, got {len(arrangement)}")
    if DisplayMode(mode) is DisplayMode.RANKED:
        value = permutation.rank(arrangement, key=identity_id)
        if rank is not None and rank != value:
            raise ValueError(f"arrangement encodes rank {value}, not {rank}")
    else:
        if rank is None:
            raise ValueError("canonical display requires the carried rank")
        if list(arrangement) != canonical_order(arrangement):
            raise ValueError("canonical arrangement must be in ascending order")
        value = rank
    selection = tuple(permutation.unrank(value, arrangement, key=identity_id))
    return Decoding(rank=value, selection=selection)


@dataclass(frozen=True, slots=True)
class TrickEncoder:
    """Encoder bound to a display mode and hidden-card slot."""

    mode: DisplayMode = DisplayMode.RANKED
    hidden_index: int = DEFAULT_HIDDEN_INDEX

    def encode(self, hand: Sequence[Card]) -> TrickResult:
        return encode(hand, hidden_index=self.hidden_index, mode=self.mode)

    def decode(self, arrangement: Sequence[Card], rank: int | None = None) -> Decoding:
        return decode(arrangement, self.mode, rank)
