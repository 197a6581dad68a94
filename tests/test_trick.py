from __future__ import annotations

import itertools

import pytest

from divination import trick
from divination.cards import Card, cards_from_codes
from divination.trick import DisplayMode, InvalidHand, TrickEncoder


def _hand() -> list[Card]:
    return cards_from_codes(["7D", "QS", "3C", "2H", "9S"])


def test_encode_hides_fifth_card_by_default() -> None:
    result = trick.encode(_hand(), mode=DisplayMode.CANONICAL)

    assert result.hidden == Card.from_code("9S")
    assert result.selection == tuple(cards_from_codes(["7D", "QS", "3C", "2H"]))
    assert result.rank == 19


def test_canonical_display_is_always_ascending() -> None:
    result = trick.encode(_hand(), mode=DisplayMode.CANONICAL)

    assert result.mode is DisplayMode.CANONICAL
    assert [card.id for card in result.arrangement] == [12, 16, 28, 46]


def test_ranked_display_lays_out_the_rank() -> None:
    result = trick.encode(_hand(), mode=DisplayMode.RANKED)

    assert result.mode is DisplayMode.RANKED
    assert result.arrangement == result.selection
    assert result.arrangement != tuple(sorted(result.selection))


def test_custom_hidden_index() -> None:
    result = TrickEncoder(hidden_index=0).encode(_hand())

    assert result.hidden == Card.from_code("7D")
    assert result.selection == tuple(cards_from_codes(["QS", "3C", "2H", "9S"]))


@pytest.mark.parametrize("mode", list(DisplayMode))
def test_every_selection_order_is_recoverable(mode: DisplayMode) -> None:
    four = cards_from_codes(["KH", "AS", "5C", "JD"])
    hidden = Card.from_code("4D")
    seen_ranks = set()
    for order in itertools.permutations(four):
        result = trick.encode(list(order) + [hidden], mode=mode)
        assert sorted(result.arrangement) == sorted(four)
        decoding = trick.decode(result.arrangement, mode, rank=result.rank)
        assert decoding.rank == result.rank
        assert decoding.selection == tuple(order)
        seen_ranks.add(result.rank)

    assert seen_ranks == set(range(1, 25))


def test_ranked_decode_needs_only_the_arrangement() -> None:
    encoder = TrickEncoder(mode=DisplayMode.RANKED)
    result = encoder.encode(_hand())

    assert encoder.decode(result.arrangement).rank == 19


def test_canonical_decode_requires_rank_and_sorted_layout() -> None:
    result = trick.encode(_hand(), mode=DisplayMode.CANONICAL)

    with pytest.raises(ValueError):
        trick.decode(result.arrangement, DisplayMode.CANONICAL)
    with pytest.raises(ValueError):
        trick.decode(tuple(reversed(result.arrangement)), DisplayMode.CANONICAL, rank=3)


def test_ranked_decode_rejects_mismatched_rank() -> None:
    result = trick.encode(_hand())

    with pytest.raises(ValueError):
        trick.decode(result.arrangement, DisplayMode.RANKED, rank=result.rank + 1)


@pytest.mark.parametrize(
    "codes",
    [
        ["7D", "QS", "3C", "2H"],
        ["7D", "QS", "3C", "2H", "9S", "KD"],
        ["7D", "QS", "3C", "2H", "7D"],
    ],
)
def test_encode_rejects_invalid_hands(codes: list[str]) -> None:
    with pytest.raises(InvalidHand):
        trick.encode(cards_from_codes(codes))


def test_encode_rejects_bad_hidden_index() -> None:
    with pytest.raises(InvalidHand):
        trick.encode(_hand(), hidden_index=5)
