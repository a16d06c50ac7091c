"""
Single-slot signature-request coordinator.

At most one request is pending.  Races between the user and the peer are
settled by identifier comparison on that slot alone:

- a new ``sign`` replaces whatever is pending, without notice;
- a peer ``cancel-signature-request`` clears the slot only if the id
  matches;
- a local approval emits ``signed`` only if its id and hash still match
  (a re-issued id with a new hash invalidates the approval).

So if the approval lands first, the later cancellation is a no-op, and
if the cancellation lands first, the approval is dropped.
"""

from __future__ import annotations

from typing import Optional

from .messages import CancelSignatureRequestMessage, SignedMessage, SignMessage
from .state import (
    RequestApproved,
    RequestRejected,
    SessionState,
    SignatureRequest,
    Transition,
)


def _matches(state: SessionState, signature_id: str) -> bool:
    return state.pending is not None and state.pending.signature_id == signature_id


def _matches_hash(state: SessionState, signature_id: str, hash_: str) -> bool:
    return _matches(state, signature_id) and state.pending.hash == hash_


def reduce_request(state: SessionState, event: object) -> Optional[Transition]:
    """Apply a request event, or return ``None`` if *event* is not one."""
    if isinstance(event, SignMessage):
        if not state.connected:
            return Transition(state)
        return Transition(state.with_pending(SignatureRequest.from_message(event)))

    if isinstance(event, CancelSignatureRequestMessage):
        if not _matches(state, event.signature_id):
            return Transition(state)
        return Transition(state.with_pending(None))

    if isinstance(event, RequestApproved):
        if not _matches_hash(state, event.signature_id, event.hash):
            return Transition(state)
        signed = SignedMessage(
            signature_id=event.signature_id,
            signature=event.signature.to_json(),
        )
        return Transition(state.with_pending(None), (signed,))

    if isinstance(event, RequestRejected):
        if not _matches(state, event.signature_id):
            return Transition(state)
        cancel = CancelSignatureRequestMessage(signature_id=event.signature_id)
        return Transition(state.with_pending(None), (cancel,))

    return None
