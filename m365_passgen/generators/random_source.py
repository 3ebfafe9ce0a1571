"""
Cryptographically secure index source shared by both generators.
"""

from __future__ import annotations

import secrets
from typing import Callable, Sequence, TypeVar

from .errors import InvalidArgument

T = TypeVar("T")


class RandomSource:
    """
    Uniform index draws and permutations backed by the OS CSPRNG.

    Holds no mutable state, so one instance can be shared across threads.
    `randbelow` is injectable for tests; it must return an int in [0, n).
    """

    def __init__(self, randbelow: Callable[[int], int] = secrets.randbelow):
        self._randbelow = randbelow

    def uniform_index(self, pool_size: int) -> int:
        """Return an unbiased index in [0, pool_size)."""
        if isinstance(pool_size, bool) or not isinstance(pool_size, int):
            raise InvalidArgument(f"pool_size must be an integer, got {pool_size!r}")
        if pool_size <= 0:
            raise InvalidArgument(f"pool_size must be positive, got {pool_size}")
        return self._randbelow(pool_size)

    def choice(self, pool: Sequence[T]) -> T:
        return pool[self.uniform_index(len(pool))]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates permutation. Returns a new list; *items* is untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.uniform_index(i + 1)
            result[i], result[j] = result[j], result[i]
        return result

    def sample(self, items: Sequence[T], k: int) -> list[T]:
        """Draw *k* elements at distinct positions, without replacement."""
        if k < 0 or k > len(items):
            raise InvalidArgument(f"cannot sample {k} of {len(items)} items")
        positions = list(range(len(items)))
        # Partial Fisher-Yates: only the first k slots are settled
        for i in range(k):
            j = i + self.uniform_index(len(positions) - i)
            positions[i], positions[j] = positions[j], positions[i]
        return [items[p] for p in positions[:k]]


default_source = RandomSource()
