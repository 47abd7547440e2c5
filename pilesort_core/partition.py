from __future__ import annotations

from dataclasses import replace
from fractions import Fraction
from typing import List, Tuple

from .config import debug_enabled, trace
from .events import AlreadyOrdered, Event, PileStatus, Target, Transfer
from .state import EMPTY, SessionState
from .streak import Streak, StreakArray


def target_for(streak: Streak, median: Fraction) -> Target:
    """
    Chooses the destination pile for a streak.

    B when the streak reaches no further above the median than it starts
    below it (ties go to B), otherwise A.
    """
    if streak.min + streak.size - median <= median - streak.min:
        return 'B'
    return 'A'


def group_end(hand: StreakArray, median: Fraction) -> Tuple[int, Target]:
    """Index one past the longest prefix of `hand` bound for the same pile, and that pile."""
    target = target_for(hand.get(0), median)
    end = 1
    while end < hand.length and target_for(hand.get(end), median) == target:
        end += 1
    return end, target


def transfer_step(state: SessionState) -> Tuple[SessionState, Transfer]:
    """Moves the next same-target group from the hand; the hand must not be empty."""
    if state.median is None or not state.hand:
        raise ValueError('transfer_step needs a non-empty hand with a median')
    hand = state.hand
    end, target = group_end(hand, state.median)
    moved = hand.slice(0, end)
    step = Transfer(moved.size, target)
    dest = state.destination(target).concat(moved)
    next_state = state.with_destination(target, dest)
    next_state = replace(next_state, hand=hand.slice(end, hand.length))
    if debug_enabled():
        trace('engine', f'{step.text()}: {moved.pretty()} -> {target} now {dest.pretty()}')
    return next_state, step


def finish_split(state: SessionState) -> SessionState:
    """Queues the drained split's piles ahead of older work, A before B."""
    children = tuple(p for p in (state.pile_a, state.pile_b) if p)
    if debug_enabled():
        trace('engine', f'split done: A={state.pile_a.card_count()} B={state.pile_b.card_count()}')
    return SessionState(
        hand=EMPTY,
        pile_a=EMPTY,
        pile_b=EMPTY,
        median=None,
        pending=children + state.pending,
    )


def take_next_pile(state: SessionState) -> Tuple[SessionState, List[Event]]:
    """
    Pulls piles off the work list until one needs splitting.

    Each pile taken is announced with a status line; piles already in
    order are reported and dropped. Returns with a fresh hand, or with
    nothing left to do.
    """
    events: List[Event] = []
    while not state.hand and state.pending:
        events.append(PileStatus(state.queued_sizes()))
        pile, rest = state.pending[0], state.pending[1:]
        if pile.is_ordered():
            events.append(AlreadyOrdered(pile.size))
            state = replace(state, pending=rest)
            continue
        median = pile.median
        if debug_enabled():
            trace('engine', f'splitting {pile.size} cards in {pile.length} streaks at median {median}')
        state = SessionState(hand=pile, pile_a=EMPTY, pile_b=EMPTY, median=median, pending=rest)
    return state, events


def partition(pile: StreakArray) -> Tuple[StreakArray, StreakArray, List[Transfer]]:
    """Splits one pile completely; returns piles A and B and the transfers made."""
    state = SessionState(hand=pile, pile_a=EMPTY, pile_b=EMPTY, median=pile.median, pending=())
    steps: List[Transfer] = []
    while state.hand:
        state, step = transfer_step(state)
        steps.append(step)
    return state.pile_a, state.pile_b, steps
