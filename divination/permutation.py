"""Lehmer-code rank/unrank bijection between permutations and integers.

A permutation of ``n`` distinct items is ranked against the items' canonical
(ascending) order. Ranks are 1-based, so the canonical order itself is rank 1
and the fully reversed order is rank ``n!``.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterator, List, Sequence, TypeVar

__all__ = [
    "OutOfRange",
    "factorial",
    "max_rank",
    "canonical_positions",
    "lehmer_code",
    "rank",
    "unrank",
    "iter_orders",
]

T = TypeVar("T")
KeyFn = Callable[[Any], Hashable]

_FACTORIALS: List[int] = [1]


class OutOfRange(ValueError):
    """Raised when a rank lies outside ``[1, n!]``."""


def factorial(n: int) -> int:
    """Return ``n!`` from an iteratively grown table."""

    if n < 0:
        raise ValueError("factorial is undefined for negative numbers")
    while len(_FACTORIALS) <= n:
        _FACTORIALS.append(_FACTORIALS[-1] * len(_FACTORIALS))
    return _FACTORIALS[n]


def max_rank(n: int) -> int:
    return factorial(n)


def _identity(item: Any) -> Hashable:
    return item


def _sorted_distinct(items: Sequence[T], key: KeyFn) -> list[T]:
    ordered = sorted(items, key=key)
    keys = [key(item) for item in ordered]
    if len(set(keys)) != len(keys):
        raise ValueError("items must be distinct")
    return ordered


def canonical_positions(
    order: Sequence[T],
    canonical: Sequence[T] | None = None,
    *,
    key: KeyFn | None = None,
) -> list[int]:
    """Return the canonical position of each item of ``order``, in presentation order."""

    key_fn = key or _identity
    reference = _sorted_distinct(order if canonical is None else canonical, key_fn)
    if len(order) != len(reference):
        raise ValueError("order and canonical set differ in size")
    lookup = {key_fn(item): idx for idx, item in enumerate(reference)}
    positions: list[int] = []
    for item in order:
        item_key = key_fn(item)
        if item_key not in lookup:
            raise ValueError(f"item {item!r} is not part of the canonical set")
        positions.append(lookup[item_key])
    if len(set(positions)) != len(positions):
        raise ValueError("order repeats an item")
    return positions


def lehmer_code(positions: Sequence[int]) -> list[int]:
    """Return, per slot, how many unused smaller positions remain."""

    size = len(positions)
    if sorted(positions) != list(range(size)):
        raise ValueError("positions must be a permutation of 0..n-1")
    used = [False] * size
    code: list[int] = []
    for position in positions:
        code.append(sum(1 for smaller in range(position) if not used[smaller]))
        used[position] = True
    return code


def rank(
    order: Sequence[T],
    canonical: Sequence[T] | None = None,
    *,
    key: KeyFn | None = None,
) -> int:
    """Return the 1-based rank of ``order`` relative to its canonical order.

    ``canonical`` may be given in any order; it is sorted by ``key`` (or the
    items' natural ordering) before use. When omitted, the items of ``order``
    themselves form the canonical set.
    """

    code = lehmer_code(canonical_positions(order, canonical, key=key))
    size = len(code)
    return 1 + sum(count * factorial(size - 1 - idx) for idx, count in enumerate(code))


def unrank(value: int, canonical: Sequence[T], *, key: KeyFn | None = None) -> list[T]:
    """Return the ordering of ``canonical`` whose rank is ``value``."""

    size = len(canonical)
    if not 1 <= value <= factorial(size):
        raise OutOfRange(f"rank {value} outside [1, {factorial(size)}]")
    available = _sorted_distinct(canonical, key or _identity)
    remainder = value - 1
    order: list[T] = []
    for idx in range(size):
        count, remainder = divmod(remainder, factorial(size - 1 - idx))
        order.append(available.pop(count))
    return order


def iter_orders(canonical: Sequence[T], *, key: KeyFn | None = None) -> Iterator[list[T]]:
    """Yield every ordering of ``canonical`` in ascending rank."""

    for value in range(1, factorial(len(canonical)) + 1):
        yield unrank(value, canonical, key=key)
