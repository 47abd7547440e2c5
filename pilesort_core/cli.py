from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

from .config import debug_enabled, env_seed, set_debug, trace
from .deal import build_deck
from .driver import Driver
from .events import AlreadyOrdered, Event, Finished, PileStatus, Transfer


def _card_count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'not a whole number: {text!r}')
    if value < 0:
        raise argparse.ArgumentTypeError(f'must not be negative: {value}')
    return value


class TerminalOutput:
    """Writes events the way a person at the table reads them."""

    def __init__(self, out: TextIO):
        self.out = out
        self.mid_line = False  # transfers of the current pile share one line

    def _end_line(self) -> None:
        if self.mid_line:
            self.out.write('\n')
            self.mid_line = False

    def emit(self, ev: Event) -> None:
        if isinstance(ev, Transfer):
            if self.mid_line:
                self.out.write(' ')
            self.out.write(ev.text())
            self.mid_line = True
        elif isinstance(ev, (PileStatus, AlreadyOrdered)):
            self._end_line()
            self.out.write(ev.text() + '\n')
        elif isinstance(ev, Finished):
            self._end_line()
        self.out.flush()

    def close(self) -> None:
        self.out.write('\n')
        self.mid_line = False
        self.out.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pilesort',
        description='Walks you through sorting a pile of numbered cards by repeated splits. '
                    'Press Enter after carrying out each instruction.',
    )
    parser.add_argument('uniques', type=_card_count, help='Number of shuffled cards with distinct values')
    parser.add_argument('groups', type=_card_count, nargs='*', default=[],
                        help='Sizes of already sorted blocks placed on top of the deck')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the deal (default: PILESORT_SEED)')
    parser.add_argument('--debug', action='store_true', default=None,
                        help='Trace split decisions to stderr (default: PILESORT_DEBUG)')
    return parser


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    set_debug(args.debug)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    seed = args.seed if args.seed is not None else env_seed()
    deck = build_deck(args.uniques, args.groups, seed=seed)
    if debug_enabled():
        trace('driver', f'dealt {deck.card_count()} cards as {deck.length} streaks: {deck.pretty()}')

    output = TerminalOutput(stdout)
    driver = Driver(deck)
    if not driver.run(stdin, output.emit):
        output.close()
    return 0
