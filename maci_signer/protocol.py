"""
High-level signer session orchestration.

Provides a single ``SignerSession`` class that ties the key store, the
channel and the session fold together into an async API a UI layer can
drive.

Usage
-----
::

    from maci_signer.protocol import SignerSession

    # Setup
    keystore = KeyStore(MemoryBlobStore())
    keystore.load_or_init()
    session = SignerSession(keystore, channel)
    runner = asyncio.create_task(session.run())

    # Pair
    await session.connect(parse_pairing_payload(scanned_text))

    # Approve whatever the peer asked us to sign
    if session.pending_request is not None:
        await session.approve()

Every state change, local or remote, goes through ``dispatch`` which
reduces one event under a lock and sends the resulting frames in order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .channel import Channel
from .errors import ChannelError, InvalidFrame
from .keystore import KeyStore
from .messages import encode_message, parse_message
from .session import is_handled, reduce
from .signing import Signature, Signer
from .state import (
    DISCONNECTED,
    ChannelClosed,
    ConnectRequested,
    DisconnectRequested,
    RequestApproved,
    RequestRejected,
    SessionState,
    SignatureRequest,
)

logger = logging.getLogger(__name__)


class SignerSession:
    """
    Async actor around the session fold.

    Lifecycle:
    1. ``run()`` consumes inbound frames until the channel closes.
    2. ``connect`` / ``disconnect`` pair and unpair with a peer.
    3. ``approve`` / ``reject`` settle the pending signature request.
    """

    def __init__(
        self,
        keystore: KeyStore,
        channel: Channel,
        *,
        offload_signing: bool = False,
    ) -> None:
        if not keystore.loaded:
            raise RuntimeError("key store must be loaded before starting a session")
        self._keystore = keystore
        self._channel = channel
        self._offload = offload_signing
        self._state: SessionState = DISCONNECTED
        self._lock = asyncio.Lock()

    # ── observable state ───────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def connected_peer(self) -> Optional[str]:
        return self._state.peer_id

    @property
    def pending_request(self) -> Optional[SignatureRequest]:
        return self._state.pending

    @property
    def offload_signing(self) -> bool:
        return self._offload

    # ── user actions ───────────────────────────────────────────────────

    async def connect(self, peer_id: str) -> None:
        """Announce the selected public key to *peer_id*."""
        public_key = self._keystore.selected.pub_key.serialize()
        await self.dispatch(ConnectRequested(peer_id=peer_id, public_key=public_key))

    async def disconnect(self) -> None:
        await self.dispatch(DisconnectRequested())

    async def approve(self) -> Optional[Signature]:
        """
        Sign the pending request's hash with the selected keypair.

        Returns the signature, or ``None`` if nothing was pending.  If the
        peer cancels while the signature is being computed, no ``signed``
        frame goes out.  An unparseable hash raises ``InvalidMessage`` and
        leaves the request pending.
        """
        request = self._state.pending
        if request is None:
            return None

        signer = Signer(self._keystore.selected.priv_key)
        if self._offload:
            signature = await asyncio.to_thread(signer.sign, request.hash)
        else:
            signature = signer.sign(request.hash)

        await self.dispatch(
            RequestApproved(request.signature_id, request.hash, signature)
        )
        return signature

    async def reject(self) -> None:
        request = self._state.pending
        if request is None:
            return
        await self.dispatch(RequestRejected(request.signature_id))

    # ── inbound ────────────────────────────────────────────────────────

    async def handle_frame(self, frame: str) -> None:
        try:
            message = parse_message(frame)
        except InvalidFrame as exc:
            logger.warning("Dropping frame: %s", exc)
            return
        await self.dispatch(message)

    async def run(self) -> None:
        """Consume the channel until it closes, then drop to Disconnected."""
        try:
            async for frame in self._channel:
                await self.handle_frame(frame)
        except ChannelError as exc:
            logger.warning("Channel failed: %s", exc)
        finally:
            await self.dispatch(ChannelClosed())

    # ── core ───────────────────────────────────────────────────────────

    async def dispatch(self, event: object) -> None:
        async with self._lock:
            if not is_handled(event):
                logger.debug("Ignoring %s", type(event).__name__)
            before = self._state
            self._state, outbound = reduce(before, event)
            if self._state != before:
                logger.debug("%s: %s -> %s", type(event).__name__, before, self._state)
            for message in outbound:
                try:
                    await self._channel.send(encode_message(message))
                except ChannelError as exc:
                    logger.warning("Could not send %s: %s", message.action, exc)

    def __repr__(self) -> str:
        return f"SignerSession(peer={self._state.peer_id!r}, pending={self._state.pending is not None})"
