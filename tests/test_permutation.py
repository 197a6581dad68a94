from __future__ import annotations

import itertools

import pytest

from divination import permutation
from divination.cards import Card, cards_from_codes, identity_id
from divination.permutation import OutOfRange


def test_factorial_table() -> None:
    assert [permutation.factorial(n) for n in range(7)] == [1, 1, 2, 6, 24, 120, 720]
    with pytest.raises(ValueError):
        permutation.factorial(-1)


def test_all_four_item_permutations_form_a_bijection() -> None:
    canonical = [0, 1, 2, 3]
    ranks = {}
    for order in itertools.permutations(canonical):
        value = permutation.rank(list(order), canonical)
        assert 1 <= value <= 24
        ranks[value] = list(order)

    assert sorted(ranks) == list(range(1, 25))
    for value, order in ranks.items():
        assert permutation.unrank(value, canonical) == order


def test_rank_endpoints() -> None:
    assert permutation.rank(["a", "b", "c", "d"]) == 1
    assert permutation.rank(["d", "c", "b", "a"]) == 24


@pytest.mark.parametrize("size", [1, 2, 3, 5])
def test_generic_sizes_round_trip(size: int) -> None:
    canonical = list(range(size))
    for value in range(1, permutation.factorial(size) + 1):
        order = permutation.unrank(value, canonical)
        assert permutation.rank(order, canonical) == value


def test_iter_orders_lists_permutations_in_rank_order() -> None:
    orders = list(permutation.iter_orders([2, 1, 3]))

    assert orders == [[1, 2, 3], [1, 3, 2], [2, 1, 3], [2, 3, 1], [3, 1, 2], [3, 2, 1]]


def test_worked_card_example() -> None:
    canonical = cards_from_codes(["3C", "7D", "QS", "2H"])
    order = cards_from_codes(["7D", "QS", "3C", "2H"])

    assert [card.id for card in canonical] == [16, 46, 12, 28]
    assert permutation.canonical_positions(order, canonical, key=identity_id) == [3, 0, 1, 2]
    assert permutation.lehmer_code([3, 0, 1, 2]) == [3, 0, 0, 0]
    assert permutation.rank(order, canonical, key=identity_id) == 19
    assert permutation.unrank(19, canonical, key=identity_id) == order


def test_cards_rank_by_natural_ordering() -> None:
    order = cards_from_codes(["7D", "QS", "3C", "2H"])

    assert permutation.rank(order) == 19


@pytest.mark.parametrize("value", [0, 25, -3])
def test_unrank_rejects_out_of_range(value: int) -> None:
    with pytest.raises(OutOfRange):
        permutation.unrank(value, [1, 2, 3, 4])


def test_rank_rejects_foreign_or_repeated_items() -> None:
    with pytest.raises(ValueError):
        permutation.rank([1, 2, 3, 9], [1, 2, 3, 4])
    with pytest.raises(ValueError):
        permutation.rank([1, 1, 2, 3], [1, 2, 3, 4])
    with pytest.raises(ValueError):
        permutation.rank([1, 2, 3], [1, 2, 3, 4])
    with pytest.raises(ValueError):
        permutation.unrank(1, [Card.from_code("QS"), Card.from_code("QS")])


def test_lehmer_code_rejects_non_permutation() -> None:
    with pytest.raises(ValueError):
        permutation.lehmer_code([0, 0, 1])
