"""
MACI key material: seeds, public points and keypairs.

A MACI private key is a byte seed, not a scalar.  The scalar is derived
as in RFC 8032 §5.1.5 but with BLAKE-512, and then divided by the
cofactor so it can be used directly against ``Base8``:

    h = BLAKE-512(seed)
    s = LE(prune(h[0:32]))
    A = (s >> 3) · Base8

These are MACI keys, not Ethereum keys; their text forms carry the
``macisk.`` / ``macipk.`` prefixes (see :pymod:`serialize`).
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from typing import List, Optional

from .curve import BASE8, Point
from .errors import InvalidFormat
from .hash import hash_seed
from .serialize import (
    deserialize_private_key,
    deserialize_public_key,
    serialize_private_key,
    serialize_public_key,
)

SEED_BYTES = 32


# ── derivation ──────────────────────────────────────────────────────────
def check_seed(seed: bytes) -> bytes:
    """Normalise a seed to ``bytes``; it must be a non-empty byte string."""
    if not isinstance(seed, (bytes, bytearray, memoryview)):
        raise TypeError(f"seed must be bytes, got {type(seed).__name__}")
    seed = bytes(seed)
    if not seed:
        raise InvalidFormat("seed must not be empty")
    return seed


def prune_buffer(buf: bytes) -> bytes:
    """
    Clamp 32 bytes for use as a scalar: clear the 3 low bits, clear the
    top bit and set the second-highest bit.
    """
    if len(buf) != 32:
        raise ValueError(f"need 32 bytes, got {len(buf)}")
    out = bytearray(buf)
    out[0] &= 0xF8
    out[31] &= 0x7F
    out[31] |= 0x40
    return bytes(out)


def clamped_scalar(seed_hash: bytes) -> int:
    """Full clamped scalar  s = LE(prune(h[0:32]))  (still a multiple of 8)."""
    return int.from_bytes(prune_buffer(seed_hash[:32]), "little")


def derive_secret_scalar(seed: bytes) -> int:
    """
    Secret scalar  s >> 3.

    Not reduced modulo the subgroup order; ``Base8`` has that order so the
    public point is identical either way.
    """
    return clamped_scalar(hash_seed(check_seed(seed))) >> 3


def derive_public_key(seed: bytes) -> Point:
    return BASE8.multiply(derive_secret_scalar(seed))


# ── key objects ─────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PrivKey:
    """A MACI private key: the raw seed."""

    seed: bytes = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "seed", check_seed(self.seed))

    @classmethod
    def generate(cls) -> PrivKey:
        return cls(secrets.token_bytes(SEED_BYTES))

    def serialize(self) -> str:
        return serialize_private_key(self.seed)

    @classmethod
    def deserialize(cls, s: str) -> PrivKey:
        return cls(deserialize_private_key(s))


@dataclass(frozen=True)
class PubKey:
    """A MACI public key: a point on Baby Jubjub."""

    point: Point

    def serialize(self) -> str:
        return serialize_public_key(self.point)

    @classmethod
    def deserialize(cls, s: str) -> PubKey:
        return cls(deserialize_public_key(s))

    def as_circuit_inputs(self) -> List[str]:
        return [str(self.point.x), str(self.point.y)]


@dataclass(frozen=True)
class Keypair:
    """
    A private key and the public key derived from it.

    The public key is never supplied by the caller; it is recomputed from
    the seed on construction.
    """

    priv_key: PrivKey
    pub_key: PubKey = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "pub_key", PubKey(derive_public_key(self.priv_key.seed)),
        )

    @classmethod
    def generate(cls, priv_key: Optional[PrivKey] = None) -> Keypair:
        return cls(priv_key or PrivKey.generate())
