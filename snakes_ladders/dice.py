"""Die-roll sources. The engine only sees the :class:`Die` protocol."""

from __future__ import annotations

import random
from typing import Iterable, Protocol, runtime_checkable

from snakes_ladders.board import DIE_FACES


@runtime_checkable
class Die(Protocol):
    """Anything that returns a uniform 1–6 from ``roll()``."""

    def roll(self) -> int: ...


class DieExhaustedError(IndexError):
    """A scripted die was asked for more rolls than it holds."""


class RandomDie:
    """Fair six-sided die with its own generator, so seeds are per game."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def roll(self) -> int:
        return self._rng.randint(1, DIE_FACES)


class ScriptedDie:
    """Deterministic die: replays a fixed sequence of values."""

    def __init__(self, values: Iterable[int]):
        self.values = list(values)
        bad = [v for v in self.values if not 1 <= v <= DIE_FACES]
        if bad:
            raise ValueError(f"Die values must be 1–{DIE_FACES}, got {bad}.")
        self._idx = 0

    @property
    def remaining(self) -> int:
        return len(self.values) - self._idx

    def roll(self) -> int:
        if self._idx >= len(self.values):
            raise DieExhaustedError(f"Scripted die ran out after {len(self.values)} rolls.")
        value = self.values[self._idx]
        self._idx += 1
        return value
