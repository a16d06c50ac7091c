"""
Pairing state machine: Disconnected ⇄ Connected(peer_id).

    Disconnected  --connect request-->  Disconnected   (emit connect)
    any           --connected{id}---->  Connected(id)
    Connected     --disconnect req--->  Connected      (emit disconnect)
    any           --disconnected{}--->  Disconnected   (drop pending)
    any           --channel close---->  Disconnected   (drop pending)

There is no observable "connecting" state, and a local disconnect waits
for the peer's ``disconnected`` echo before the state changes.
"""

from __future__ import annotations

import json
from typing import Optional

from .errors import InvalidFormat
from .messages import (
    ConnectedMessage,
    ConnectMessage,
    DisconnectedMessage,
    DisconnectMessage,
)
from .state import (
    DISCONNECTED,
    ChannelClosed,
    ConnectRequested,
    DisconnectRequested,
    SessionState,
    Transition,
)


def reduce_pairing(state: SessionState, event: object) -> Optional[Transition]:
    """Apply a pairing event, or return ``None`` if *event* is not one."""
    if isinstance(event, ConnectRequested):
        if state.connected:
            return Transition(state)
        return Transition(
            state,
            (ConnectMessage(peer_id=event.peer_id, public_key=event.public_key),),
        )

    if isinstance(event, ConnectedMessage):
        return Transition(state.with_peer(event.peer_id))

    if isinstance(event, DisconnectRequested):
        if not state.connected:
            return Transition(state)
        return Transition(state, (DisconnectMessage(),))

    if isinstance(event, (DisconnectedMessage, ChannelClosed)):
        return Transition(DISCONNECTED)

    return None


def parse_pairing_payload(payload: str) -> str:
    """
    Extract the peer id from a scanned pairing code.

    The code is a JSON object whose ``webId`` is the peer id.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise InvalidFormat("pairing code is not JSON") from exc
    if not isinstance(data, dict):
        raise InvalidFormat("pairing code must be a JSON object")
    peer_id = data.get("webId")
    if not isinstance(peer_id, str) or not peer_id:
        raise InvalidFormat("pairing code has no webId")
    return peer_id
