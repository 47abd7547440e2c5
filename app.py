from __future__ import annotations

import os
from fractions import Fraction
from typing import Any, Dict, List, Tuple

from flask import Flask, jsonify, request

from pilesort_core.config import env_flag, env_max_cards, env_seed, trace
from pilesort_core.deal import build_deck
from pilesort_core.driver import advance
from pilesort_core.events import AlreadyOrdered, Event, Finished, PileStatus, Transfer
from pilesort_core.state import SessionState
from pilesort_core.streak import Streak, StreakArray

app = Flask(__name__)

INDEX_TEXT = """pilesort
POST /api/new      {"uniques": 10, "groups": [4], "seed": 1}
POST /api/advance  {"state": <state from the previous reply>}
POST /api/deck     {"uniques": 10, "groups": [4], "seed": 1}
"""


def pile_to_json(pile: StreakArray) -> List[List[int]]:
    return [[int(s.min), int(s.size)] for s in pile]


def pile_from_json(obj: Any) -> StreakArray:
    return StreakArray(tuple(Streak(int(lo), int(n)) for lo, n in obj))


def state_to_json(s: SessionState) -> Dict[str, Any]:
    return {
        "hand": pile_to_json(s.hand),
        "pileA": pile_to_json(s.pile_a),
        "pileB": pile_to_json(s.pile_b),
        "median": None if s.median is None else f"{s.median.numerator}/{s.median.denominator}",
        "pending": [pile_to_json(p) for p in s.pending],
    }


def json_to_state(obj: Dict[str, Any]) -> SessionState:
    """Rebuilds a session sent back by a client; raises ValueError on states the engine never produces."""
    median = obj.get("median")
    state = SessionState(
        hand=pile_from_json(obj.get("hand", [])),
        pile_a=pile_from_json(obj.get("pileA", [])),
        pile_b=pile_from_json(obj.get("pileB", [])),
        median=None if median is None else Fraction(str(median)),
        pending=tuple(pile_from_json(p) for p in obj.get("pending", [])),
    )
    if any(not p for p in state.pending):
        raise ValueError("empty pile in pending")
    if state.hand and state.median is None:
        raise ValueError("hand without median")
    if not state.hand and (state.median is not None or state.pile_a or state.pile_b):
        raise ValueError("split in progress without a hand")
    _check_unique_cards((state.hand, state.pile_a, state.pile_b) + state.pending)
    return state


def _check_unique_cards(piles: Tuple[StreakArray, ...]) -> None:
    runs = sorted((s for p in piles for s in p), key=lambda s: s.min)
    for left, right in zip(runs, runs[1:]):
        if left.end > right.min:
            raise ValueError(f"card {right.min} appears more than once")


def event_to_json(ev: Event) -> Dict[str, Any]:
    if isinstance(ev, Transfer):
        return {"kind": "transfer", "count": ev.count, "target": ev.target, "text": ev.text()}
    if isinstance(ev, PileStatus):
        return {"kind": "status", "sizes": list(ev.sizes), "text": ev.text()}
    if isinstance(ev, AlreadyOrdered):
        return {"kind": "ordered", "size": ev.size, "text": ev.text()}
    return {"kind": "finished", "text": ev.text()}


def _deck_args(body: Dict[str, Any]) -> Dict[str, Any]:
    uniques = int(body.get("uniques", 0))
    groups = [int(g) for g in body.get("groups", [])]
    max_cards = env_max_cards()
    if uniques + sum(groups) > max_cards:
        raise ValueError(f"at most {max_cards} cards per deck")
    seed = body.get("seed", None)
    if seed is None:
        seed = env_seed()
    return {"uniques": uniques, "identical_groups": groups, "seed": None if seed is None else int(seed)}


def _step_reply(state: SessionState, events: List[Event]) -> Any:
    return jsonify({
        "ok": True,
        "state": state_to_json(state),
        "events": [event_to_json(ev) for ev in events],
        "finished": any(isinstance(ev, Finished) for ev in events),
    })


@app.get("/")
def index() -> Any:
    return INDEX_TEXT, 200, {"Content-Type": "text/plain; charset=utf-8"}


@app.post("/api/deck")
def api_deck() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        deck = build_deck(**_deck_args(body))
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad deck request: {e}"}), 400
    return jsonify({"ok": True, "streaks": pile_to_json(deck), "values": deck.values()})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        deck = build_deck(**_deck_args(body))
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad deck request: {e}"}), 400
    trace('api', f'new session with {deck.card_count()} cards')
    state, events = advance(SessionState.start(deck))
    return _step_reply(state, events)


@app.post("/api/advance")
def api_advance() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return jsonify({"ok": False, "error": "missing state"}), 400
    try:
        state = json_to_state(s_in)
    except (KeyError, TypeError, ValueError, ZeroDivisionError) as e:
        return jsonify({"ok": False, "error": f"bad state: {e}"}), 400
    state, events = advance(state)
    return _step_reply(state, events)


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
