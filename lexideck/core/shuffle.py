# core/shuffle.py
"""
Shared randomisation helpers for the learning modes.

Every shuffle in the engine goes through `shuffled`, which relies on
`random.Random.shuffle` (Fisher-Yates), so every permutation is equally likely.
Pass a seeded `random.Random` to get reproducible orders in tests.
"""
import random
from typing import Hashable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


def shuffled(items: Iterable[T], rng: Optional[random.Random] = None) -> List[T]:
    """Returns a new list with the items in uniformly random order."""
    result = list(items)
    (rng or random).shuffle(result)
    return result


def take_random(items: Sequence[T], k: int, rng: Optional[random.Random] = None) -> List[T]:
    """
    Selection without replacement: the first k items of a uniform shuffle.
    Asking for more items than available returns all of them.
    """
    if k <= 0:
        return []
    return shuffled(items, rng)[:k]


def unique(items: Iterable[H]) -> List[H]:
    """Drops repeated values, keeping first occurrences in order."""
    seen = set()
    result = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
