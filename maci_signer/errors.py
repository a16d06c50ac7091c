"""
Exception taxonomy for maci-signer.

Codec and cryptographic faults (``InvalidFormat``, ``InvalidPoint``,
``InvalidMessage``) always propagate to the caller.  ``StorageReadFailure``
is recovered locally by the key store, and ``ChannelError`` /
``InvalidFrame`` are logged and dropped by the session actor because the
peer is untrusted.
"""

from __future__ import annotations


class MaciSignerError(Exception):
    """Base class for every error raised by this package."""


class InvalidFormat(MaciSignerError, ValueError):
    """Malformed serialized key or pairing payload."""


class InvalidPoint(MaciSignerError, ValueError):
    """Coordinates or a packed integer that do not give a curve point."""


class InvalidMessage(MaciSignerError, ValueError):
    """Signing input that cannot be reduced to a non-negative scalar."""


class StorageReadFailure(MaciSignerError):
    """Persisted key list is missing or corrupt."""


class ChannelError(MaciSignerError):
    """Transport failure or use of a closed channel."""


class InvalidFrame(MaciSignerError, ValueError):
    """A channel frame that does not decode to a known protocol message."""
