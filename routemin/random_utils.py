"""Random selection and shuffling of sequences in place."""

from __future__ import annotations

from typing import Any, MutableSequence, Protocol

from routemin.prng import pseudo_random_in_range


class _RangeSource(Protocol):
    def randint(self, low: int, high: int) -> int: ...


def _draw(rng: _RangeSource | None, low: int, high: int) -> int:
    if rng is None:
        return pseudo_random_in_range(low, high)
    return rng.randint(low, high)


def random_subset(
    items: MutableSequence[Any], k: int, rng: _RangeSource | None = None
) -> None:
    """Move a uniformly random choice of ``k`` items to the front, in place.

    ``rng`` provides ``randint(low, high)``; the shared generator is used
    when it is None.
    """
    n = len(items)
    if k > n:
        raise ValueError(f"cannot choose {k} items out of {n}")
    for i in range(k):
        j = _draw(rng, i, n - 1)
        items[i], items[j] = items[j], items[i]


def random_shuffle(items: MutableSequence[Any], rng: _RangeSource | None = None) -> None:
    """Shuffle ``items`` uniformly in place."""
    random_subset(items, len(items) - 1, rng)