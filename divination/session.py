"""Game session state machine sequencing selection, encoding and reveal."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List

from . import deck as deck_mod
from . import trick
from .cards import Card
from .deck import Deck
from .trick import DisplayMode, InvalidHand, TrickResult

__all__ = ["Phase", "SessionConfig", "SessionView", "Session", "new_session"]

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Phases a session moves through."""

    SELECTING = "selecting"
    REVEALED = "revealed"


@dataclass(slots=True)
class SessionConfig:
    """Runtime configuration for a single session."""

    hand_size: int = trick.HAND_SIZE
    hidden_index: int = trick.DEFAULT_HIDDEN_INDEX
    display_mode: DisplayMode = DisplayMode.RANKED
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.hand_size != trick.HAND_SIZE:
            raise ValueError(f"hand_size must be {trick.HAND_SIZE}")
        if not 0 <= self.hidden_index < self.hand_size:
            raise ValueError("hidden_index must point inside the hand")
        self.display_mode = DisplayMode(self.display_mode)


@dataclass(frozen=True, slots=True)
class SessionView:
    """Snapshot handed to the presentation layer after every mutation."""

    phase: Phase
    hand: tuple[Card, ...]
    hand_size: int
    arrangement: tuple[Card, ...] = ()
    rank: int | None = None
    hidden: Card | None = None
    show_hidden: bool = False

    @property
    def selected(self) -> int:
        return len(self.hand)

    @property
    def remaining(self) -> int:
        return self.hand_size - len(self.hand)

    @property
    def can_commit(self) -> bool:
        return self.phase is Phase.SELECTING and self.remaining == 0


@dataclass(slots=True)
class Session:
    """Mutable session owning a deck, the chosen hand and the encoded result.

    Illegal transitions are ignored rather than raised, except ``commit`` on
    an incomplete hand which raises :class:`InvalidHand`.
    """

    config: SessionConfig = field(default_factory=SessionConfig)
    rng: Any = None
    deck: Deck = field(init=False)
    hand: List[Card] = field(default_factory=list, init=False)
    phase: Phase = field(default=Phase.SELECTING, init=False)
    result: TrickResult | None = field(default=None, init=False)
    show_hidden: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        self.deck = deck_mod.shuffle(deck_mod.generate(), self.rng)

    def is_selected(self, card: Card) -> bool:
        return card in self.hand

    def view(self) -> SessionView:
        result = self.result
        return SessionView(
            phase=self.phase,
            hand=tuple(self.hand),
            hand_size=self.config.hand_size,
            arrangement=result.arrangement if result is not None else (),
            rank=result.rank if result is not None else None,
            hidden=result.hidden if result is not None and self.show_hidden else None,
            show_hidden=self.show_hidden,
        )

    def select(self, card: Card) -> SessionView:
        """Append ``card`` to the hand when the selection is still open."""

        if not isinstance(card, Card):
            raise TypeError(f"expected a Card, got {type(card).__name__}")
        if self.phase is not Phase.SELECTING:
            logger.debug("select ignored in phase %s", self.phase.value)
        elif len(self.hand) >= self.config.hand_size:
            logger.debug("select ignored: hand already full")
        elif card in self.hand:
            logger.debug("select ignored: %s already chosen", card.code)
        else:
            self.hand.append(card)
            logger.debug("selected %s (%d/%d)", card.code, len(self.hand), self.config.hand_size)
        return self.view()

    def commit(self) -> SessionView:
        """Encode the completed hand and move to the revealed phase."""

        if self.phase is not Phase.SELECTING:
            logger.debug("commit ignored in phase %s", self.phase.value)
            return self.view()
        if len(self.hand) != self.config.hand_size:
            raise InvalidHand(
                f"selection incomplete: {len(self.hand)}/{self.config.hand_size} cards"
            )
        self.result = trick.encode(
            self.hand,
            hidden_index=self.config.hidden_index,
            mode=self.config.display_mode,
        )
        self.phase = Phase.REVEALED
        self.show_hidden = False
        logger.debug(
            "committed hand, rank %d in %s display",
            self.result.rank,
            self.result.mode.value,
        )
        return self.view()

    def toggle_reveal(self) -> SessionView:
        if self.phase is not Phase.REVEALED:
            logger.debug("toggle_reveal ignored in phase %s", self.phase.value)
            return self.view()
        self.show_hidden = not self.show_hidden
        return self.view()

    def reset(self) -> SessionView:
        """Clear the hand and result, reshuffle, and return to selection."""

        self.hand = []
        self.result = None
        self.show_hidden = False
        self.phase = Phase.SELECTING
        self.deck = deck_mod.shuffle(self.deck, self.rng)
        logger.debug("session reset")
        return self.view()


def new_session(config: SessionConfig | None = None, rng: Any = None) -> Session:
    """Return a fresh session over a shuffled deck."""

    return Session(config=config or SessionConfig(), rng=rng)
