from __future__ import annotations

from typing import Callable, Iterable, List, Tuple

from .config import trace
from .events import AlreadyOrdered, Event, Finished, PileStatus, Transfer
from .partition import finish_split, take_next_pile, transfer_step
from .state import SessionState
from .streak import StreakArray


def advance(state: SessionState) -> Tuple[SessionState, List[Event]]:
    """
    Runs exactly one instruction step.

    If no pile is being split, piles are taken off the work list (with a
    status line each) until one needs splitting. Then one transfer is made.
    When the work list runs dry the step ends with a Finished event instead.
    """
    events: List[Event] = []
    if not state.hand:
        state, events = take_next_pile(state)
    if not state.hand:
        events.append(Finished())
        return state, events
    state, step = transfer_step(state)
    events.append(step)
    if not state.hand:
        state = finish_split(state)
    return state, events


class Driver:
    """Holds the session between confirmations and advances it one step at a time."""

    def __init__(self, deck: StreakArray):
        self.state = SessionState.start(deck)
        self.transfers = 0
        self.piles_taken = 0
        self.ordered_piles = 0

    @property
    def splits(self) -> int:
        return self.piles_taken - self.ordered_piles

    @property
    def finished(self) -> bool:
        return self.state.is_finished()

    def advance(self) -> List[Event]:
        self.state, events = advance(self.state)
        for ev in events:
            if isinstance(ev, Transfer):
                self.transfers += 1
            elif isinstance(ev, AlreadyOrdered):
                self.ordered_piles += 1
            elif isinstance(ev, PileStatus):
                self.piles_taken += 1
        return events

    def run(self, confirmations: Iterable[object], emit: Callable[[Event], None]) -> bool:
        """
        Issues the first instruction, then one more per confirmation.

        Returns True when every pile ended up in order, False when the
        confirmations ran out first.
        """
        for ev in self.advance():
            emit(ev)
        if self.finished:
            return True
        for _ in confirmations:
            for ev in self.advance():
                emit(ev)
            if self.finished:
                trace('driver', f'done after {self.transfers} transfers')
                return True
        trace('driver', f'input closed after {self.transfers} transfers')
        return False

    def run_to_completion(self) -> List[Event]:
        """Advances until nothing is left to split; mostly for simulations."""
        out: List[Event] = []
        while True:
            events = self.advance()
            out.extend(events)
            if any(isinstance(ev, Finished) for ev in events):
                return out
