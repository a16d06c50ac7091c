"""
Event-sourced session fold.

    (state, event) ──reduce──▶ (state', outbound messages)

``reduce`` is pure: the outcome of every connect/disconnect and
sign/cancel race is a function of event order alone, which is what the
tests exercise.  Events nobody handles (outbound-only actions echoed back
by a confused peer, for instance) leave the state untouched.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .coordinator import reduce_request
from .pairing import reduce_pairing
from .state import DISCONNECTED, SessionState, Transition

_REDUCERS = (reduce_pairing, reduce_request)


def reduce(state: SessionState, event: object) -> Transition:
    for reducer in _REDUCERS:
        transition = reducer(state, event)
        if transition is not None:
            return transition
    return Transition(state)


def fold(
    events: Iterable[object],
    state: SessionState = DISCONNECTED,
) -> Tuple[SessionState, List]:
    """Reduce *events* in order; returns the final state and all outbound messages."""
    outbound: List = []
    for event in events:
        state, sent = reduce(state, event)
        outbound.extend(sent)
    return state, outbound


def is_handled(event: object) -> bool:
    """Whether some reducer recognises *event* (used for logging only)."""
    return any(r(DISCONNECTED, event) is not None for r in _REDUCERS)
