from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

Target = str  # 'A' or 'B'


@dataclass(frozen=True)
class PileStatus:
    """Sizes of every queued pile, next pile first, shown before a pile is taken up."""
    sizes: Tuple[int, ...]

    def text(self) -> str:
        return '(' + ' '.join(str(n) for n in self.sizes) + ')'


@dataclass(frozen=True)
class Transfer:
    """Move `count` cards from the front of the hand onto pile `target`."""
    count: int
    target: Target

    def text(self) -> str:
        return f'{self.count} to {self.target}'


@dataclass(frozen=True)
class AlreadyOrdered:
    size: int

    def text(self) -> str:
        return f'Pile of {self.size} cards is already shuffled.'


@dataclass(frozen=True)
class Finished:
    def text(self) -> str:
        return ''


Event = Union[PileStatus, Transfer, AlreadyOrdered, Finished]
