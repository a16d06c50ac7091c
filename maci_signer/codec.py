"""
Point compression for Baby Jubjub.

A point packs into one 256-bit integer: the little-endian word holds *y*
in bits 0..253 and the sign of *x* in bit 255.  "Sign" follows the signed
view of F_p used by zk-kit and circomlib: *x* is negative when it exceeds
(p-1)/2.  Decompression recovers *x* from the curve equation

    x² = (1 - y²) / (a - d·y²)

and picks the root whose sign matches the stored bit.
"""

from __future__ import annotations

from .curve import A, D, Point
from .errors import InvalidPoint
from .field import FIELD_PRIME, inv_mod, is_negative, sqrt_mod

SIGN_BIT = 1 << 255
PACKED_BITS = 256


def pack_point(point: Point) -> int:
    """Compress *point* into a single integer; rejects points off the curve."""
    if not isinstance(point, Point) or not point.on_curve():
        raise InvalidPoint("cannot pack a point that is not on Baby Jubjub")
    packed = point.y
    if is_negative(point.x):
        packed |= SIGN_BIT
    return packed


def unpack_point(packed: int) -> Point:
    """Inverse of :func:`pack_point`."""
    if isinstance(packed, bool) or not isinstance(packed, int):
        raise InvalidPoint("packed point must be an integer")
    if packed < 0 or packed >> PACKED_BITS:
        raise InvalidPoint("packed point outside 256 bits")

    sign = bool(packed & SIGN_BIT)
    y = packed & (SIGN_BIT - 1)
    if y >= FIELD_PRIME:
        raise InvalidPoint("y-coordinate outside the base field")

    p = FIELD_PRIME
    y2 = y * y % p
    denominator = (A - D * y2) % p
    if denominator == 0:
        raise InvalidPoint("no curve point with this y-coordinate")
    x2 = (1 - y2) * inv_mod(denominator) % p

    x = sqrt_mod(x2)
    if x is None:
        raise InvalidPoint("no curve point with this y-coordinate")
    if sign:
        if x == 0:
            raise InvalidPoint("sign bit set for x = 0")
        x = p - x
    return Point(x, y)
