"""
Dice - Seeded randomness and the per-turn dice pool.

One DiceRoller drives every random decision in a game (dice, deck
shuffles, event targets), so a seed fully reproduces a game.
"""

from __future__ import annotations
from collections import Counter
import random
from typing import Sequence, TypeVar

from .errors import InvalidConsumption


T = TypeVar("T")

# A d3 is a six-sided die with doubled faces
D3_FACES = (1, 1, 2, 2, 3, 3)


class DiceRoller:
    """Seeded source of randomness for one game."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rng = random.Random(seed)

    def roll_d3(self) -> int:
        return self.rng.choice(D3_FACES)

    def roll_many(self, count: int) -> list[int]:
        return [self.roll_d3() for _ in range(count)]

    def choice(self, options: Sequence[T]) -> T:
        return self.rng.choice(options)

    def shuffle(self, items: list[T]) -> list[T]:
        """Shuffle in place and return the list for chaining."""
        self.rng.shuffle(items)
        return items

    def sample(self, items: Sequence[T], count: int) -> list[T]:
        return self.rng.sample(list(items), min(count, len(items)))


class DicePool:
    """
    The dice rolled for one turn.

    Values are consumed exactly once. Asking for a value that is not
    left in the pool raises InvalidConsumption and leaves the pool as it
    was.
    """

    def __init__(self, values: Sequence[int]):
        self.rolled = list(values)
        self._remaining = list(values)

    def has_remaining(self) -> bool:
        return bool(self._remaining)

    def remaining(self) -> list[int]:
        """Peek at the unconsumed values (a copy)."""
        return list(self._remaining)

    def consumed(self) -> list[int]:
        left = Counter(self._remaining)
        used = Counter(self.rolled)
        used.subtract(left)
        return sorted(used.elements())

    def can_consume(self, values: Sequence[int]) -> bool:
        needed = Counter(values)
        available = Counter(self._remaining)
        return all(available[value] >= count for value, count in needed.items())

    def consume_one(self, value: int):
        if value not in self._remaining:
            raise InvalidConsumption([value], self._remaining)
        self._remaining.remove(value)

    def consume_many(self, values: Sequence[int]):
        # Check the whole multiset before touching the pool
        if not values or not self.can_consume(values):
            raise InvalidConsumption(list(values), self._remaining)
        for value in values:
            self._remaining.remove(value)

    def __repr__(self) -> str:
        return f"DicePool(rolled={self.rolled}, remaining={self._remaining})"
