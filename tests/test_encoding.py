from __future__ import annotations

import pytest

from divination import encoding
from divination.cards import Card, Rank, Suit, identity_id, iter_full_deck, unidentify
from divination.encoding import InvalidCard


def test_identity_id_follows_suit_order() -> None:
    assert identity_id(Card(Suit.SPADES, Rank.ACE)) == 1
    assert identity_id(Card(Suit.SPADES, Rank.KING)) == 13
    assert identity_id(Card(Suit.CLUBS, Rank.ACE)) == 14
    assert identity_id(Card(Suit.HEARTS, Rank.TWO)) == 28
    assert identity_id(Card(Suit.DIAMONDS, Rank.KING)) == 52


@pytest.mark.parametrize("card_identifier", encoding.all_ids())
def test_unidentify_round_trips_every_id(card_identifier: int) -> None:
    assert identity_id(unidentify(card_identifier)) == card_identifier


def test_ids_and_pairs_correspond_one_to_one() -> None:
    pairs = {(card.suit, card.rank) for card in iter_full_deck()}
    ids = {card.id for card in iter_full_deck()}

    assert len(pairs) == 52
    assert ids == set(range(1, 53))


@pytest.mark.parametrize("suit_idx, rank", [(-1, 1), (4, 1), (0, 0), (0, 14)])
def test_identity_id_rejects_out_of_range(suit_idx: int, rank: int) -> None:
    with pytest.raises(InvalidCard):
        encoding.identity_id(suit_idx, rank)


@pytest.mark.parametrize("card_identifier", [0, 53, -5])
def test_decode_id_rejects_out_of_range(card_identifier: int) -> None:
    with pytest.raises(InvalidCard):
        encoding.decode_id(card_identifier)


def test_card_construction_validates_pair() -> None:
    with pytest.raises(InvalidCard):
        Card("X", Rank.ACE)  # type: ignore[arg-type]
    with pytest.raises(InvalidCard):
        Card(Suit.SPADES, 14)  # type: ignore[arg-type]


def test_card_codes_parse_and_format() -> None:
    queen = Card.from_code("QS")
    ten = Card.from_code("10h")

    assert queen == Card(Suit.SPADES, Rank.QUEEN)
    assert queen.id == 12
    assert ten.code == "10H"
    assert ten.label() == "10♥"
    with pytest.raises(InvalidCard):
        Card.from_code("1S")
    with pytest.raises(InvalidCard):
        Card.from_code("QX")


def test_asset_is_ignored_by_equality_and_ordering() -> None:
    plain = Card(Suit.CLUBS, Rank.THREE)
    tagged = plain.with_asset("clubs03.png")

    assert plain == tagged
    assert hash(plain) == hash(tagged)
    assert tagged.asset == "clubs03.png"
    assert sorted([Card.from_code("7D"), tagged, Card.from_code("QS")]) == [
        Card.from_code("QS"),
        plain,
        Card.from_code("7D"),
    ]
