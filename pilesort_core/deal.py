from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .streak import StreakArray


def random_permutation(n: int, rng: Optional[random.Random] = None) -> List[int]:
    """Every value in [0, n) exactly once, drawn one at a time from a shrinking pool."""
    rng = rng or random.Random()
    pool = list(range(n))
    drawn: List[int] = []
    while pool:
        drawn.append(pool.pop(rng.randrange(len(pool))))
    return drawn


def build_deck(uniques: int, identical_groups: Sequence[int] = (), seed: Optional[int] = None) -> StreakArray:
    """
    Deals the starting pile.

    The first `uniques` drawn values stay in random order and form the bottom
    of the deck. Each identical group then takes the next values, sorted, and
    is placed in front of everything dealt so far, the way an already ordered
    block of cards would sit on top of the pile.
    """
    if uniques < 0 or any(g < 0 for g in identical_groups):
        raise ValueError('Card counts must be non-negative')
    rng = random.Random(seed)
    drawn = random_permutation(uniques + sum(identical_groups), rng)
    deck = drawn[:uniques]
    pos = uniques
    for group in identical_groups:
        block = sorted(drawn[pos:pos + group])
        deck = block + deck
        pos += group
    return StreakArray.construct(deck)
