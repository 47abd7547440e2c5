from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Sequence, Tuple

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from pilesort_core.deal import build_deck  # type: ignore
from pilesort_core.driver import Driver  # type: ignore


def simulate_one(uniques: int, groups: Sequence[int], seed: int) -> Tuple[int, int, int, int]:
    """Plays one deal to the end; returns (streaks dealt, transfers, splits, ordered piles)."""
    deck = build_deck(uniques, groups, seed=seed)
    driver = Driver(deck)
    driver.run_to_completion()
    return deck.length, driver.transfers, driver.splits, driver.ordered_piles


def process(args: argparse.Namespace) -> None:
    groups: List[int] = list(args.groups)
    start_time = time.time()
    total_transfers = 0
    worst = 0
    for i in range(int(args.count)):
        seed = int(args.seed) + i
        streaks, transfers, splits, ordered = simulate_one(int(args.uniques), groups, seed)
        total_transfers += transfers
        worst = max(worst, transfers)
        if args.verbose:
            print(f"seed={seed} streaks={streaks} transfers={transfers} splits={splits} ordered={ordered}")
    count = max(1, int(args.count))
    elapsed = time.time() - start_time
    print(f"decks={args.count} cards={int(args.uniques) + sum(groups)} "
          f"avg_transfers={total_transfers / count:.2f} worst={worst} elapsed={elapsed:.2f}s")


def main() -> None:
    parser = argparse.ArgumentParser(description='Play many seeded deals to the end and report instruction counts')
    parser.add_argument('uniques', type=int, help='Shuffled cards per deck')
    parser.add_argument('groups', type=int, nargs='*', default=[], help='Sorted block sizes')
    parser.add_argument('--count', type=int, default=100, help='Number of decks to play')
    parser.add_argument('--seed', type=int, default=0, help='Seed of the first deck; later decks count up')
    parser.add_argument('--verbose', action='store_true', help='Print one line per deck')
    args = parser.parse_args()
    process(args)


if __name__ == '__main__':
    main()
