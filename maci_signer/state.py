"""
Session state and the local events that drive it.

The session is one immutable value, ``SessionState``, with two
single-slot fields: the paired peer and the pending signature request.
It changes only by reducing events: inbound protocol messages (the
models in :pymod:`messages`) and the local events defined here.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import NamedTuple, Optional, Tuple

from .messages import SignMessage
from .signing import Signature


@dataclass(frozen=True)
class SignatureRequest:
    """The one pending request the user is asked to approve or reject."""

    signature_id: str
    poll_id: str
    title: str
    selected_option: str
    hash: str

    @classmethod
    def from_message(cls, msg: SignMessage) -> SignatureRequest:
        return cls(
            signature_id=msg.signature_id,
            poll_id=msg.data.poll_id,
            title=msg.data.title,
            selected_option=msg.data.selected_option,
            hash=msg.hash,
        )


@dataclass(frozen=True)
class SessionState:
    """``peer_id is None`` means Disconnected, otherwise Connected(peer_id)."""

    peer_id: Optional[str] = None
    pending: Optional[SignatureRequest] = None

    @property
    def connected(self) -> bool:
        return self.peer_id is not None

    def with_peer(self, peer_id: Optional[str]) -> SessionState:
        return replace(self, peer_id=peer_id)

    def with_pending(self, pending: Optional[SignatureRequest]) -> SessionState:
        return replace(self, pending=pending)


DISCONNECTED = SessionState()


class Transition(NamedTuple):
    """Result of reducing one event: next state and messages to send."""

    state: SessionState
    outbound: Tuple = ()


# ── local events ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ConnectRequested:
    """User scanned a peer id; announce ourselves with our public key."""

    peer_id: str
    public_key: str


@dataclass(frozen=True)
class DisconnectRequested:
    pass


@dataclass(frozen=True)
class RequestApproved:
    """A signature over ``hash`` was computed for ``signature_id``."""

    signature_id: str
    hash: str
    signature: Signature


@dataclass(frozen=True)
class RequestRejected:
    signature_id: str


@dataclass(frozen=True)
class ChannelClosed:
    """Transport-level close; not a protocol message."""
