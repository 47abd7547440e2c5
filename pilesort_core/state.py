from __future__ import annotations

from dataclasses import dataclass, replace
from fractions import Fraction
from typing import Optional, Tuple

from .events import Target
from .streak import StreakArray

EMPTY = StreakArray()


@dataclass(frozen=True)
class SessionState:
    """Everything needed to resume the sort at the next confirmation."""
    hand: StreakArray  # pile currently being split; empty between splits
    pile_a: StreakArray
    pile_b: StreakArray
    median: Optional[Fraction]  # set while a split is in progress
    pending: Tuple[StreakArray, ...]  # next pile first

    @classmethod
    def start(cls, deck: StreakArray) -> 'SessionState':
        return cls(hand=EMPTY, pile_a=EMPTY, pile_b=EMPTY, median=None, pending=(deck,) if deck else ())

    def is_splitting(self) -> bool:
        return bool(self.hand)

    def is_finished(self) -> bool:
        return not self.hand and not self.pending

    def queued_sizes(self) -> Tuple[int, ...]:
        return tuple(p.card_count() for p in self.pending)

    def destination(self, target: Target) -> StreakArray:
        return self.pile_a if target == 'A' else self.pile_b

    def with_destination(self, target: Target, pile: StreakArray) -> 'SessionState':
        if target == 'A':
            return replace(self, pile_a=pile)
        return replace(self, pile_b=pile)
