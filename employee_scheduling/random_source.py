"""
Seeded pseudo-random sequences for the demo data generator.

The generated instance depends on the exact bit sequence of the generator, so
the algorithm is pluggable:

- Lcg48Sequence: 48-bit linear congruential generator (multiplier 0x5DEECE66D,
  addend 0xB). Instances match any other implementation of the same
  generator draw for draw.
- PythonSequence: random.Random (Mersenne Twister). Same distributional
  shape, different concrete instance.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any, List, MutableSequence


class SeededSequence(ABC):
    """Minimal set of draws the generator relies on."""

    @abstractmethod
    def next_int(self, bound: int) -> int:
        """Uniform int in [0, bound)."""

    @abstractmethod
    def next_double(self) -> float:
        """Uniform float in [0.0, 1.0)."""

    @abstractmethod
    def next_boolean(self) -> bool:
        pass

    def shuffle(self, items: MutableSequence[Any]) -> None:
        """Shuffle in place, swapping from the end of the list backwards."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(i + 1)
            items[i], items[j] = items[j], items[i]


class Lcg48Sequence(SeededSequence):
    _MULTIPLIER = 0x5DEECE66D
    _ADDEND = 0xB
    _MASK = (1 << 48) - 1

    def __init__(self, seed: int = 0):
        self._state = (seed ^ self._MULTIPLIER) & self._MASK

    def _next(self, bits: int) -> int:
        self._state = (self._state * self._MULTIPLIER + self._ADDEND) & self._MASK
        return self._state >> (48 - bits)

    def next_int32(self) -> int:
        """Signed 32-bit int over the full range."""
        value = self._next(32)
        return value - (1 << 32) if value >= (1 << 31) else value

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        if bound & (bound - 1) == 0:
            return (bound * self._next(31)) >> 31
        while True:
            bits = self._next(31)
            value = bits % bound
            # reject the incomplete last block of the 31-bit range
            if bits - value + (bound - 1) < (1 << 31):
                return value

    def next_double(self) -> float:
        return ((self._next(26) << 27) + self._next(27)) * (1.0 / (1 << 53))

    def next_boolean(self) -> bool:
        return self._next(1) != 0


class PythonSequence(SeededSequence):
    def __init__(self, seed: int = 0):
        self._rng = random.Random(seed)

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def next_double(self) -> float:
        return self._rng.random()

    def next_boolean(self) -> bool:
        return self._rng.random() < 0.5

    def shuffle(self, items: MutableSequence[Any]) -> None:
        self._rng.shuffle(items)


SEQUENCE_KINDS = {
    "lcg48": Lcg48Sequence,
    "python": PythonSequence,
}


def make_sequence(kind: str = "lcg48", seed: int = 0) -> SeededSequence:
    """Build a seeded sequence by name ("lcg48" or "python")."""
    try:
        factory = SEQUENCE_KINDS[kind.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown random sequence '{kind}', expected one of {sorted(SEQUENCE_KINDS)}"
        ) from None
    return factory(seed)


def available_sequences() -> List[str]:
    return sorted(SEQUENCE_KINDS)
