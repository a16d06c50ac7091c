"""
Hash roles of the EdDSA-Poseidon scheme.

Unlike a tagged-hash design, none of these calls carry a domain tag: the
byte layout is fixed by the circuits and verifiers the signatures must
interoperate with.

    h  = BLAKE-512(seed)                              key expansion
    r  = BLAKE-512(h[32:64] ‖ LE32(m))  mod l         deterministic nonce
    c  = Poseidon(R8.x, R8.y, A.x, A.y, m)            challenge
"""

from __future__ import annotations

from .blake import blake512
from .curve import Point
from .field import SCALAR_BYTES, Scalar
from .poseidon import poseidon5

SEED_HASH_BYTES = 64


def hash_seed(seed: bytes) -> bytes:
    """Expand a private seed into 64 bytes: scalar half ‖ nonce-prefix half."""
    return blake512(seed)


def hash_nonce(nonce_prefix: bytes, message: int) -> Scalar:
    """
    Deterministic nonce  r = BLAKE-512(prefix ‖ LE32(m))  mod l.

    The nonce depends only on the secret prefix and the message, so the
    same pair always yields the same signature and two different messages
    never share a nonce.
    """
    msg_bytes = message.to_bytes(SCALAR_BYTES, "little")
    return Scalar.from_bytes_le(blake512(nonce_prefix + msg_bytes))


def hash_challenge(R8: Point, A: Point, message: int) -> int:
    """Challenge  c = Poseidon5(R8.x, R8.y, A.x, A.y, m)  in F_p."""
    return poseidon5(R8.x, R8.y, A.x, A.y, message)
