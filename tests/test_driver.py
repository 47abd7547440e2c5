import unittest
from unittest.mock import patch

from pilesort_core import config
from pilesort_core.deal import build_deck
from pilesort_core.driver import Driver, advance
from pilesort_core.events import AlreadyOrdered, Finished, PileStatus, Transfer
from pilesort_core.state import SessionState
from pilesort_core.streak import StreakArray


def _six_card_deck():
    return StreakArray.construct([1, 0, 3, 2, 5, 4])


class TestAdvance(unittest.TestCase):
    def test_given_fresh_session_when_advancing_then_status_then_one_transfer(self):
        state = SessionState.start(_six_card_deck())
        state, events = advance(state)
        self.assertEqual(events, [PileStatus((6,)), Transfer(2, 'B')])
        self.assertTrue(state.is_splitting())

        state, events = advance(state)
        self.assertEqual(events, [Transfer(1, 'A')])

    def test_given_last_group_when_advancing_then_children_queued_a_first(self):
        state = SessionState.start(_six_card_deck())
        for _ in range(4):
            state, events = advance(state)
        self.assertEqual(events, [Transfer(2, 'A')])
        self.assertFalse(state.hand)
        self.assertEqual([p.values() for p in state.pending], [[3, 5, 4], [1, 0, 2]])

    def test_given_session_state_when_advancing_then_input_state_unchanged(self):
        start = SessionState.start(_six_card_deck())
        after, _ = advance(start)
        self.assertEqual(start, SessionState.start(_six_card_deck()))
        self.assertNotEqual(start, after)

    def test_given_empty_deck_when_advancing_then_finished_at_once(self):
        state, events = advance(SessionState.start(StreakArray()))
        self.assertEqual(events, [Finished()])
        self.assertTrue(state.is_finished())


class TestDriver(unittest.TestCase):
    def test_given_six_card_deck_when_run_to_completion_then_full_event_sequence(self):
        driver = Driver(_six_card_deck())
        events = driver.run_to_completion()
        expected = [
            PileStatus((6,)), Transfer(2, 'B'), Transfer(1, 'A'), Transfer(1, 'B'), Transfer(2, 'A'),
            PileStatus((3, 3)), Transfer(1, 'B'), Transfer(1, 'A'), Transfer(1, 'B'),
            PileStatus((1, 2, 3)), AlreadyOrdered(1),
            PileStatus((2, 3)), AlreadyOrdered(2),
            PileStatus((3,)), Transfer(2, 'B'), Transfer(1, 'A'),
            PileStatus((1, 2)), AlreadyOrdered(1),
            PileStatus((2,)), Transfer(1, 'A'), Transfer(1, 'B'),
            PileStatus((1, 1)), AlreadyOrdered(1),
            PileStatus((1,)), AlreadyOrdered(1),
            Finished(),
        ]
        self.assertEqual(events, expected)
        self.assertEqual(driver.transfers, 11)
        self.assertEqual(driver.splits, 4)
        self.assertEqual(driver.ordered_piles, 5)
        self.assertTrue(driver.finished)

    def test_given_random_four_card_decks_when_driven_then_work_list_empties(self):
        for seed in range(40):
            driver = Driver(build_deck(4, [], seed=seed))
            steps = 0
            while not driver.finished:
                driver.advance()
                steps += 1
                self.assertLess(steps, 100)
            self.assertEqual(driver.state.pending, ())
            self.assertFalse(driver.state.hand)

    def test_given_every_transfer_when_played_then_ordered_piles_cover_deck(self):
        deck = build_deck(20, [4, 3], seed=5)
        events = Driver(deck).run_to_completion()
        ordered = sum(ev.size for ev in events if isinstance(ev, AlreadyOrdered))
        self.assertEqual(ordered, deck.size)

    def test_given_confirmations_run_out_when_running_then_false_and_paused(self):
        driver = Driver(_six_card_deck())
        seen = []
        done = driver.run(iter(['\n', '\n']), seen.append)
        self.assertFalse(done)
        self.assertEqual(seen, [PileStatus((6,)), Transfer(2, 'B'), Transfer(1, 'A'), Transfer(1, 'B')])
        self.assertEqual(driver.transfers, 3)

    def test_given_enough_confirmations_when_running_then_true_and_unused_left(self):
        driver = Driver(_six_card_deck())
        lines = iter(['\n'] * 20)
        seen = []
        self.assertTrue(driver.run(lines, seen.append))
        self.assertEqual(seen[-1], Finished())
        # First step needs no confirmation; 11 more advances finish the job
        self.assertEqual(len(list(lines)), 9)

    def test_given_debug_off_when_running_then_no_pile_rendering(self):
        config.set_debug(False)
        try:
            with patch.object(StreakArray, 'pretty', side_effect=AssertionError('rendered with debug off')):
                events = Driver(build_deck(15, [2], seed=3)).run_to_completion()
        finally:
            config.set_debug(None)
        self.assertEqual(events[-1], Finished())

    def test_given_ordered_deck_when_running_then_done_without_confirmations(self):
        seen = []
        self.assertTrue(Driver(StreakArray.construct([0, 1, 2, 3])).run(iter([]), seen.append))
        self.assertEqual(seen, [PileStatus((4,)), AlreadyOrdered(4), Finished()])


if __name__ == "__main__":
    unittest.main(verbosity=2)
