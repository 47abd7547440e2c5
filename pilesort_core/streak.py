from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class Streak:
    """A run of consecutive card values: min, min+1, ..., min+size-1."""
    min: int
    size: int

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f'Streak size must be at least 1, got {self.size}')

    @property
    def end(self) -> int:
        """One past the highest value in the run."""
        return self.min + self.size

    def precedes(self, other: 'Streak') -> bool:
        """True when `other` continues this run and the two can be merged."""
        return self.end == other.min

    def merged(self, other: 'Streak') -> 'Streak':
        return Streak(self.min, self.size + other.size)

    def values(self) -> range:
        return range(self.min, self.end)


@dataclass(frozen=True)
class StreakArray:
    """
    A pile of cards stored as run-length encoded streaks, in pile order.

    Entries keep the order the cards occur in the pile, so they are not
    sorted by value. Adjacent entries are never mergeable; every way of
    building an array (construct, concat, slice) keeps it that way.
    """
    streaks: Tuple[Streak, ...] = ()

    def __post_init__(self) -> None:
        for left, right in zip(self.streaks, self.streaks[1:]):
            if left.precedes(right):
                raise ValueError(f'Adjacent streaks {left} and {right} must be merged')

    @classmethod
    def construct(cls, values: Iterable[int]) -> 'StreakArray':
        """Run-length encodes `values` in the given order (no sorting)."""
        out: List[Streak] = []
        current_min = 0
        current_size = 0
        for v in values:
            if current_size and v == current_min + current_size:
                current_size += 1
                continue
            if current_size:
                out.append(Streak(current_min, current_size))
            current_min, current_size = v, 1
        if current_size:
            out.append(Streak(current_min, current_size))
        return cls(tuple(out))

    def concat(self, *others: 'StreakArray') -> 'StreakArray':
        """Concatenates piles left to right, merging runs that meet at a boundary."""
        result = self
        for other in others:
            result = result._concat_one(other)
        return result

    def _concat_one(self, other: 'StreakArray') -> 'StreakArray':
        if not other.streaks:
            return self
        if not self.streaks:
            return other
        last, first = self.streaks[-1], other.streaks[0]
        if last.precedes(first):
            joined = self.streaks[:-1] + (last.merged(first),) + other.streaks[1:]
            return StreakArray(joined)
        return StreakArray(self.streaks + other.streaks)

    def slice(self, begin: int, end: int) -> 'StreakArray':
        """Entries in [begin, end); streaks themselves are never split."""
        return StreakArray(self.streaks[begin:end])

    def get(self, i: int) -> Streak:
        return self.streaks[i]

    @property
    def length(self) -> int:
        """Number of stored streaks; a pile is in order exactly when this is 1."""
        return len(self.streaks)

    @property
    def min(self) -> int:
        self._require_cards('min')
        return min(s.min for s in self.streaks)

    @property
    def size(self) -> int:
        self._require_cards('size')
        return sum(s.size for s in self.streaks)

    @property
    def median(self) -> Fraction:
        """min + size/2 as an exact rational; only ever compared, never shown."""
        return self.min + Fraction(self.size, 2)

    def is_ordered(self) -> bool:
        return self.length == 1

    def values(self) -> List[int]:
        """Expands every streak back into the card values, in pile order."""
        return [v for s in self.streaks for v in s.values()]

    def card_count(self) -> int:
        """Like `size`, but 0 for an empty pile."""
        return sum(s.size for s in self.streaks)

    def _require_cards(self, what: str) -> None:
        if not self.streaks:
            raise ValueError(f'{what} is undefined for an empty pile')

    def __len__(self) -> int:
        return len(self.streaks)

    def __iter__(self) -> Iterator[Streak]:
        return iter(self.streaks)

    def __bool__(self) -> bool:
        return bool(self.streaks)

    def pretty(self) -> str:
        """Compact human-readable form, e.g. '[2..4 7..9 12]'."""
        parts: List[str] = []
        for s in self.streaks:
            parts.append(str(s.min) if s.size == 1 else f'{s.min}..{s.end - 1}')
        return '[' + ' '.join(parts) + ']'
