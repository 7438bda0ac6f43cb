"""Deterministic random stream keyed by a 32-bit seed (mulberry32)."""
from __future__ import annotations

from typing import Callable

RandomStream = Callable[[], float]

_MASK = 0xFFFFFFFF
_GOLDEN = 0x6D2B79F5
_SCALE = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def create_seeded_random(seed: int) -> RandomStream:
    """Return a callable producing floats in [0, 1) from ``seed``.

    Any integer is accepted; it is folded into 32 bits first. Two streams
    created from the same seed yield the same sequence.
    """
    state = seed & _MASK

    def seeded_random() -> float:
        nonlocal state
        state = (state + _GOLDEN) & _MASK
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
        return ((t ^ (t >> 14)) & _MASK) / _SCALE

    return seeded_random


def pick_index(random: RandomStream, length: int) -> int:
    """Uniform index in ``range(length)`` using one draw from ``random``."""
    return int(random() * length)
