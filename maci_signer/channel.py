"""
Duplex text-frame channel to the paired peer.

The session core only needs two things from a transport: ``send`` one
frame, and async-iterate inbound frames.  Iteration ending is the
channel-close event.  ``MemoryChannel`` is the in-process implementation
used by tests and local tooling; a relay-backed transport plugs in by
satisfying the same protocol.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Optional, Protocol, Tuple, runtime_checkable

from .errors import ChannelError

_CLOSED = object()


@runtime_checkable
class Channel(Protocol):
    async def send(self, frame: str) -> None: ...

    def __aiter__(self) -> AsyncIterator[str]: ...


class MemoryChannel:
    """
    One end of an in-memory duplex pipe.

    Frames sent on one end are received, in order, on the other.  Closing
    either end terminates iteration on both.
    """

    def __init__(self) -> None:
        self._inbox: asyncio.Queue = asyncio.Queue()
        self._peer: Optional[MemoryChannel] = None
        self._closed = False

    @classmethod
    def pair(cls) -> Tuple[MemoryChannel, MemoryChannel]:
        left, right = cls(), cls()
        left._peer, right._peer = right, left
        return left, right

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, frame: str) -> None:
        if self._closed or self._peer is None:
            raise ChannelError("channel is closed")
        await self._peer._inbox.put(frame)

    async def receive(self) -> str:
        """Next inbound frame; raises ``ChannelError`` once the channel is closed."""
        frame = await self._inbox.get()
        if frame is _CLOSED:
            # Leave the marker for any other reader.
            self._inbox.put_nowait(_CLOSED)
            raise ChannelError("channel is closed")
        return frame

    def close(self) -> None:
        for end in (self, self._peer):
            if end is not None and not end._closed:
                end._closed = True
                end._inbox.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[str]:
        return self._frames()

    async def _frames(self) -> AsyncIterator[str]:
        while True:
            try:
                yield await self.receive()
            except ChannelError:
                return

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"MemoryChannel({state}, queued={self._inbox.qsize()})"
