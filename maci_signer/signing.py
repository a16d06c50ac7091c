"""
Deterministic EdDSA-Poseidon signing over Baby Jubjub.

Given a private seed and a message scalar *m*:

    h  = BLAKE-512(seed)
    s  = LE(prune(h[0:32]))                 full clamped scalar
    A  = (s >> 3) · Base8                   signer's public key
    r  = BLAKE-512(h[32:64] ‖ LE32(m)) mod l
    R8 = r · Base8
    c  = Poseidon5(R8.x, R8.y, A.x, A.y, m)
    S  = r + c · s   (mod l)

Note that *A* uses ``s >> 3`` while *S* uses the unshifted *s*.  The
verifier compensates by checking  S·Base8 == R8 + 8c·A, so both must stay
exactly as written for signatures to verify against existing circuits
and contracts.

The nonce comes from a hash rather than an RNG, so the same (seed, m)
pair always produces the same signature and distinct messages never share
a nonce.

No verification routine lives here; that is the peer's job.

References
----------
- circomlib ``eddsa.signPoseidon``, zk-kit ``eddsa-poseidon``
- RFC 8032 §5.1.6 (structure of deterministic EdDSA signing)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from .codec import pack_point
from .curve import BASE8, Point
from .errors import InvalidFormat, InvalidMessage, InvalidPoint
from .field import SUBORDER, Scalar
from .hash import SEED_HASH_BYTES, hash_challenge, hash_nonce, hash_seed
from .keys import PrivKey, clamped_scalar

MESSAGE_BITS = 256

_DECIMAL = frozenset("0123456789")


# ── data structures ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Signature:
    """
    EdDSA-Poseidon signature  (R8, S).

    Wire form: ``{"R8": {"0": "<x>", "1": "<y>"}, "S": "<S>"}`` with every
    integer as a base-10 string.
    """

    R8: Point
    S: int

    def to_wire(self) -> Dict[str, Any]:
        return {
            "R8": {"0": str(self.R8.x), "1": str(self.R8.y)},
            "S": str(self.S),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_wire(), separators=(",", ":"))

    def packed_r8(self) -> int:
        return pack_point(self.R8)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> Signature:
        try:
            r8 = data["R8"]
            x = _parse_decimal(r8["0"])
            y = _parse_decimal(r8["1"])
            S = _parse_decimal(data["S"])
        except (KeyError, TypeError) as exc:
            raise InvalidFormat(f"malformed signature: {exc}") from exc
        point = Point(x, y)
        if not point.on_curve():
            raise InvalidPoint("signature R8 is not on the curve")
        if S >= SUBORDER:
            raise InvalidFormat("signature S is not reduced")
        return cls(R8=point, S=S)

    @classmethod
    def from_json(cls, text: str) -> Signature:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise InvalidFormat("signature is not valid JSON") from exc
        if not isinstance(data, dict):
            raise InvalidFormat("signature must be a JSON object")
        return cls.from_wire(data)


# ── message handling ────────────────────────────────────────────────────

def check_message(message: Union[int, str]) -> int:
    """
    Reduce a message to a non-negative integer below 2^256.

    Accepts an ``int`` or a string in decimal or with a ``0x`` / ``0o`` /
    ``0b`` prefix, the forms a peer's ``BigInt(...)`` would produce.
    """
    if isinstance(message, bool):
        raise InvalidMessage("message must be an integer, not a bool")
    if isinstance(message, int):
        value = message
    elif isinstance(message, str):
        value = _parse_message_text(message.strip())
    else:
        raise InvalidMessage(
            f"message must be an int or str, got {type(message).__name__}"
        )
    if value < 0:
        raise InvalidMessage("message must be non-negative")
    if value >> MESSAGE_BITS:
        raise InvalidMessage(f"message does not fit in {MESSAGE_BITS} bits")
    return value


def _parse_message_text(text: str) -> int:
    if not text or "_" in text:
        raise InvalidMessage(f"cannot interpret {text!r} as an integer")
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            return int(text, 0)
        if not set(text) <= _DECIMAL:
            raise ValueError(text)
        return int(text, 10)
    except ValueError:
        raise InvalidMessage(f"cannot interpret {text!r} as an integer") from None


def _parse_decimal(value: Any) -> int:
    if not isinstance(value, str) or not value or not set(value) <= _DECIMAL:
        raise InvalidFormat(f"expected a decimal string, got {value!r}")
    return int(value, 10)


# ── signer ──────────────────────────────────────────────────────────────

class Signer:
    """
    Signing state for one private key.

    Expands the seed once and caches the public point, so repeated
    signatures cost two scalar multiplications instead of three.
    """

    def __init__(self, priv_key: PrivKey) -> None:
        seed_hash = hash_seed(priv_key.seed)
        self._s = clamped_scalar(seed_hash)
        self._nonce_prefix = seed_hash[32:SEED_HASH_BYTES]
        self.public_point = BASE8.multiply(self._s >> 3)

    def sign(self, message: Union[int, str]) -> Signature:
        m = check_message(message)

        r = hash_nonce(self._nonce_prefix, m)
        R8 = BASE8.multiply(r.value)

        c = hash_challenge(R8, self.public_point, m)
        S = r + Scalar(c) * self._s

        return Signature(R8=R8, S=S.value)


def sign_message(seed: bytes, message: Union[int, str]) -> Signature:
    """Sign *message* with the private *seed*; see the module docstring."""
    m = check_message(message)
    return Signer(PrivKey(seed)).sign(m)
