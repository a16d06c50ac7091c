"""
Finite-field utilities for Baby Jubjub.

Two moduli are involved:

- ``FIELD_PRIME`` (*p*): the BN254 scalar field, which is the base field
  of Baby Jubjub.  Curve coordinates and Poseidon live here.
- ``SUBORDER`` (*l*): the order of the prime subgroup generated by
  ``Base8``.  Signature scalars live here.

``Scalar`` wraps arithmetic in Z_l; the free functions below provide the
few base-field operations needed by the curve and the point codec.
Everything is plain Python ``int`` so there is no overflow.
"""

from __future__ import annotations

from typing import Optional, Union

# ── moduli ──────────────────────────────────────────────────────────────
FIELD_PRIME = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)
SUBORDER = (
    2736030358979909402780800718157159386076813972158567259200215660948447373041
)
SCALAR_BYTES = 32


# ── Scalar  (Z_l arithmetic) ────────────────────────────────────────────
class Scalar:
    """Element of Z_l  where *l* = ``SUBORDER``."""

    __slots__ = ("_v",)

    def __init__(self, value: int) -> None:
        self._v = value % SUBORDER

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls) -> Scalar:
        return cls(0)

    @classmethod
    def from_bytes_le(cls, data: bytes) -> Scalar:
        """Hash-output safe: reduce a little-endian byte string modulo *l*."""
        return cls(int.from_bytes(data, "little"))

    # serialisation ----------------------------------------------------------
    def to_bytes_le(self) -> bytes:
        return self._v.to_bytes(SCALAR_BYTES, "little")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    # arithmetic -------------------------------------------------------------
    def __add__(self, o: Union[Scalar, int]) -> Scalar:
        if isinstance(o, Scalar):
            return Scalar(self._v + o._v)
        if isinstance(o, int):
            return Scalar(self._v + o)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, o: Union[Scalar, int]) -> Scalar:
        if isinstance(o, Scalar):
            return Scalar(self._v - o._v)
        if isinstance(o, int):
            return Scalar(self._v - o)
        return NotImplemented

    def __mul__(self, o: Union[Scalar, int]) -> Scalar:
        if isinstance(o, Scalar):
            return Scalar(self._v * o._v)
        if isinstance(o, int):
            return Scalar(self._v * o)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> Scalar:
        return Scalar(-self._v)

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, Scalar):
            return self._v == o._v
        if isinstance(o, int):
            return self._v == o % SUBORDER
        return False

    def __hash__(self) -> int:
        return hash(self._v)

    def __int__(self) -> int:
        return self._v

    def __index__(self) -> int:
        return self._v

    def __repr__(self) -> str:
        h = hex(self._v)
        return f"Scalar(0x{h[2:10]}…)" if len(h) > 14 else f"Scalar({h})"


# ── base-field helpers  (mod p) ─────────────────────────────────────────
def inv_mod(a: int, p: int = FIELD_PRIME) -> int:
    """Multiplicative inverse via Fermat's little theorem."""
    a %= p
    if a == 0:
        raise ZeroDivisionError("cannot invert zero")
    return pow(a, p - 2, p)


def legendre(a: int, p: int = FIELD_PRIME) -> int:
    """Legendre symbol (a | p) as 1, -1 or 0."""
    ls = pow(a % p, (p - 1) // 2, p)
    return -1 if ls == p - 1 else ls


def is_negative(a: int, p: int = FIELD_PRIME) -> bool:
    """
    Signed view of a field element: values above (p-1)/2 count as negative.

    This is the ordering ffjavascript's ``F1Field.lt`` uses, and hence the
    one the point codec must reproduce.
    """
    return (a % p) > (p >> 1)


def sqrt_mod(a: int, p: int = FIELD_PRIME) -> Optional[int]:
    """
    Square root modulo *p* via Tonelli-Shanks.

    Returns the root that is non-negative in the signed view (≤ (p-1)/2),
    or ``None`` when *a* is a non-residue.
    """
    a %= p
    if a == 0:
        return 0
    if legendre(a, p) != 1:
        return None

    # p - 1 = q · 2^s  with q odd
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1

    z = 2
    while legendre(z, p) != -1:
        z += 1

    m = s
    c = pow(z, q, p)
    t = pow(a, q, p)
    r = pow(a, (q + 1) // 2, p)
    while t != 1:
        # least i with t^(2^i) == 1
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        r = r * b % p

    return p - r if is_negative(r, p) else r
