"""Persistent pseudo-random piece sequence.

Each node is an immutable (value, state) pair; ``next()`` returns a new node
and leaves the receiver untouched, so any node can be replayed.
"""
from __future__ import annotations

from dataclasses import dataclass


_MASK = 0xFFFFFFFF


def _lcg_next(state: int) -> int:
    return (state * 0x41C64E6D + 0x3039) & _MASK


@dataclass(frozen=True)
class RandomSequence:
    max_index: int
    state: int

    @property
    def value(self) -> int:
        """Index in ``[0, max_index]`` derived from the high bits of the state."""
        return ((self.state >> 16) & 0x7FFF) % (self.max_index + 1)

    def next(self) -> "RandomSequence":
        return RandomSequence(self.max_index, _lcg_next(self.state))


def random_numbers(max_index: int, seed: int = 0) -> RandomSequence:
    if max_index < 0:
        raise ValueError(f"max_index must be non-negative, got {max_index}")
    return RandomSequence(max_index, _lcg_next(seed & _MASK))
