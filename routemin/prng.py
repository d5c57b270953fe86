"""Pseudo-random and entropy-backed number generation.

The solver draws its pseudo-random numbers from a xoshiro256++ generator.
A module-level generator backs the convenience functions; it starts with
an all-zero state until :func:`random_init` or :func:`pseudo_random_seed`
is called.
"""

from __future__ import annotations

import os
import random
import sys
from collections.abc import Callable, Iterable

_MASK64 = (1 << 64) - 1
_SPLITMIX_GAMMA = 0x9E3779B97F4A7C15
_SPLITMIX_MUL1 = 0xBF58476D1CE4E5B9
_SPLITMIX_MUL2 = 0x94D049BB133111EB
_STATE_WORDS = 4


def splitmix64_next(x: int) -> tuple[int, int]:
    """Advance a splitmix64 state.

    Returns ``(new_state, output)``.
    """
    x = (x + _SPLITMIX_GAMMA) & _MASK64
    z = x
    z = ((z ^ (z >> 30)) * _SPLITMIX_MUL1) & _MASK64
    z = ((z ^ (z >> 27)) * _SPLITMIX_MUL2) & _MASK64
    return x, z ^ (z >> 31)


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _MASK64


def _bounded(draw: Callable[[], int], low: int, high: int) -> int:
    """Uniform integer in ``[low, high]`` by bitmask with rejection."""
    if high < low:
        raise ValueError(f"empty range: low={low} > high={high}")
    span = high - low
    if span > _MASK64:
        raise ValueError("range does not fit into 64 bits")
    mask = (1 << (span | 1).bit_length()) - 1
    while True:
        result = draw() & mask
        if result <= span:
            return low + result


def random_bytes(size: int) -> bytes:
    """Return ``size`` random bytes from the OS entropy source.

    Falls back to the standard pseudo-random generator when no entropy
    source is available.
    """
    if size < 0:
        raise ValueError("size must be non-negative")
    try:
        return os.urandom(size)
    except NotImplementedError:
        return random.randbytes(size)


def real_random() -> int:
    """Return an unsigned 64-bit integer built from 8 random bytes."""
    return int.from_bytes(random_bytes(8), sys.byteorder)


def real_random_in_range(low: int, high: int) -> int:
    """Uniform integer in ``[low, high]`` drawn from entropy."""
    return _bounded(real_random, low, high)


class Xoshiro256:
    """The xoshiro256++ pseudo-random generator."""

    __slots__ = ("_s",)

    def __init__(self, state: Iterable[int]) -> None:
        self._s: list[int] = [0] * _STATE_WORDS
        self.set_state(state)

    @classmethod
    def from_seed(cls, seed: int) -> Xoshiro256:
        """Build a generator whose state is expanded from ``seed`` by splitmix64."""
        mix = seed & _MASK64
        words = []
        for _ in range(_STATE_WORDS):
            mix, value = splitmix64_next(mix)
            words.append(value)
        return cls(words)

    @classmethod
    def from_entropy(cls) -> Xoshiro256:
        """Build a generator whose state comes from :func:`random_bytes`."""
        raw = random_bytes(8 * _STATE_WORDS)
        return cls(
            int.from_bytes(raw[offset:offset + 8], sys.byteorder)
            for offset in range(0, len(raw), 8)
        )

    @property
    def state(self) -> tuple[int, int, int, int]:
        """The current four state words."""
        return tuple(self._s)  # type: ignore[return-value]

    def set_state(self, state: Iterable[int]) -> None:
        """Replace the internal state with four unsigned 64-bit words."""
        words = list(state)
        if len(words) != _STATE_WORDS:
            raise ValueError(f"state must have {_STATE_WORDS} words, got {len(words)}")
        for word in words:
            if not isinstance(word, int) or not 0 <= word <= _MASK64:
                raise ValueError(f"state word out of range: {word!r}")
        self._s = words

    def next(self) -> int:
        """Return the next unsigned 64-bit output."""
        s = self._s
        result = (_rotl((s[0] + s[3]) & _MASK64, 23) + s[0]) & _MASK64
        t = (s[1] << 17) & _MASK64
        s[2] ^= s[0]
        s[3] ^= s[1]
        s[1] ^= s[2]
        s[0] ^= s[3]
        s[2] ^= t
        s[3] = _rotl(s[3], 45)
        return result

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]``, both ends included."""
        return _bounded(self.next, low, high)

    def state_str(self) -> str:
        """The state words as decimal numbers separated by spaces."""
        return " ".join(str(word) for word in self._s)


_generator = Xoshiro256((0, 0, 0, 0))


def random_init() -> None:
    """Seed the shared generator from the OS entropy source."""
    _generator.set_state(Xoshiro256.from_entropy().state)


def pseudo_random_seed(seed: int) -> None:
    """Seed the shared generator deterministically."""
    _generator.set_state(Xoshiro256.from_seed(seed).state)


def xoshiro_random() -> int:
    """Next output of the shared generator."""
    return _generator.next()


def pseudo_random_in_range(low: int, high: int) -> int:
    """Uniform integer in ``[low, high]`` from the shared generator."""
    return _generator.randint(low, high)