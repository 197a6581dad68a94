"""Top-level package for the five-card divination codec."""

from . import cards, deck, encoding, permutation, session, trick
from .cards import Card, Rank, Suit
from .deck import Deck, InvalidDeck
from .encoding import InvalidCard
from .permutation import OutOfRange
from .session import Phase, Session, SessionConfig
from .trick import DisplayMode, InvalidHand, TrickEncoder

__all__ = [
    "cards",
    "deck",
    "encoding",
    "permutation",
    "session",
    "trick",
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "InvalidDeck",
    "InvalidCard",
    "OutOfRange",
    "Phase",
    "Session",
    "SessionConfig",
    "DisplayMode",
    "InvalidHand",
    "TrickEncoder",
]
