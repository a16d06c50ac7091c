"""
Text encodings of MACI keys.

    private:  "macisk." + 64 hex digits (the 32-byte seed)
    public:   "macipk." + hex(pack(point)), padded to an even length

All string input is validated here, once; nothing below this layer
re-parses key text.
"""

from __future__ import annotations

import string

from .codec import pack_point, unpack_point
from .curve import Point
from .errors import InvalidFormat, InvalidPoint

SERIALIZED_PRIV_KEY_PREFIX = "macisk."
SERIALIZED_PUB_KEY_PREFIX = "macipk."
PRIV_KEY_HEX_CHARS = 64

_HEX_DIGITS = frozenset(string.hexdigits)


def _is_hex(s: str) -> bool:
    return bool(s) and all(ch in _HEX_DIGITS for ch in s)


# ── private keys ────────────────────────────────────────────────────────
def serialize_private_key(seed: bytes) -> str:
    seed = bytes(seed)
    if len(seed) != PRIV_KEY_HEX_CHARS // 2:
        raise InvalidFormat(
            f"only {PRIV_KEY_HEX_CHARS // 2}-byte seeds can be serialized, got {len(seed)}"
        )
    return SERIALIZED_PRIV_KEY_PREFIX + seed.hex()


def deserialize_private_key(s: str) -> bytes:
    if not is_valid_serialized_private_key(s):
        raise InvalidFormat("not a serialized MACI private key")
    body = s[len(SERIALIZED_PRIV_KEY_PREFIX):]
    if not _is_hex(body):
        raise InvalidFormat("private key body is not hexadecimal")
    return bytes.fromhex(body)


def is_valid_serialized_private_key(s: str) -> bool:
    """Prefix and length check only; does not raise."""
    return (
        isinstance(s, str)
        and s.startswith(SERIALIZED_PRIV_KEY_PREFIX)
        and len(s) - len(SERIALIZED_PRIV_KEY_PREFIX) == PRIV_KEY_HEX_CHARS
    )


# ── public keys ─────────────────────────────────────────────────────────
def serialize_public_key(point: Point) -> str:
    packed = format(pack_point(point), "x")
    if len(packed) % 2:
        packed = "0" + packed
    return SERIALIZED_PUB_KEY_PREFIX + packed


def deserialize_public_key(s: str) -> Point:
    if not isinstance(s, str) or not s.startswith(SERIALIZED_PUB_KEY_PREFIX):
        raise InvalidFormat("not a serialized MACI public key")
    body = s[len(SERIALIZED_PUB_KEY_PREFIX):]
    if not _is_hex(body):
        raise InvalidFormat("public key body is not hexadecimal")
    return unpack_point(int(body, 16))


def is_valid_serialized_public_key(s: str) -> bool:
    """Full deserialization attempt; does not raise."""
    try:
        deserialize_public_key(s)
    except (InvalidFormat, InvalidPoint):
        return False
    return True
