"""Card identity encoding utilities for the divination trick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

RANKS: Final[list[str]] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
SUITS: Final[list[str]] = ["S", "C", "H", "D"]
SUIT_NAMES: Final[list[str]] = ["spades", "clubs", "hearts", "diamonds"]
RANK_TO_VALUE: Final[dict[str, int]] = {rank: idx + 1 for idx, rank in enumerate(RANKS)}
SUIT_TO_IDX: Final[dict[str, int]] = {suit: idx for idx, suit in enumerate(SUITS)}
RANKS_PER_SUIT: Final[int] = 13
MIN_ID: Final[int] = 1
MAX_ID: Final[int] = len(SUITS) * RANKS_PER_SUIT


class InvalidCard(ValueError):
    """Raised when a suit/rank pair or identifier lies outside the 52-card deck."""


@dataclass(frozen=True, slots=True)
class CardDecoding:
    """Typed container describing a decoded identity id."""

    suit_idx: int
    rank: int

    @property
    def code(self) -> str:
        return f"{RANKS[self.rank - 1]}{SUITS[self.suit_idx]}"


def identity_id(suit_idx: int, rank: int) -> int:
    """Encode a suit ordinal and a rank value (1-13) into an id in [1, 52]."""

    if not 0 <= suit_idx < len(SUITS):
        raise InvalidCard(f"suit index {suit_idx} out of range")
    if not 1 <= rank <= RANKS_PER_SUIT:
        raise InvalidCard(f"rank {rank} out of range")
    return rank + RANKS_PER_SUIT * suit_idx


def decode_id(card_identifier: int) -> CardDecoding:
    """Decode an identity id back into its suit ordinal and rank."""

    if not MIN_ID <= card_identifier <= MAX_ID:
        raise InvalidCard(f"card identifier {card_identifier} out of range")
    suit_idx, rank_offset = divmod(card_identifier - 1, RANKS_PER_SUIT)
    return CardDecoding(suit_idx=suit_idx, rank=rank_offset + 1)


def parse_code(code: str) -> int:
    """Return the identity id for a short code such as ``QS`` or ``10h``."""

    text = code.strip().upper()
    if len(text) < 2:
        raise InvalidCard(f"invalid card code '{code}'")
    rank_text, suit_text = text[:-1], text[-1]
    if rank_text not in RANK_TO_VALUE or suit_text not in SUIT_TO_IDX:
        raise InvalidCard(f"invalid card code '{code}'")
    return identity_id(SUIT_TO_IDX[suit_text], RANK_TO_VALUE[rank_text])


def all_ids() -> list[int]:
    """Return every identity id in ascending order."""

    return list(range(MIN_ID, MAX_ID + 1))
