"""
Baby Jubjub elliptic-curve arithmetic.

Baby Jubjub is the twisted Edwards curve

    a·x² + y² = 1 + d·x²·y²      over  F_p,  p = BN254 scalar field

with  a = 168700,  d = 168696.  Because *a* is a square and *d* is not,
the addition law is complete: the same formula handles doubling and the
identity (0, 1), so scalar multiplication needs no special cases.

All arithmetic is pure Python on affine coordinates; each addition costs
one field inversion.

References
----------
- EIP-2494             Baby Jubjub elliptic curve
- Bernstein et al.     "Twisted Edwards Curves", AFRICACRYPT 2008
"""

from __future__ import annotations

from typing import Union

from .errors import InvalidPoint
from .field import FIELD_PRIME, SUBORDER, Scalar, inv_mod

# ── Baby Jubjub constants ───────────────────────────────────────────────
A = 168700
D = 168696
ORDER = 8 * SUBORDER          # full group order (cofactor 8)


# ── Point  (affine twisted-Edwards coordinates) ─────────────────────────
class Point:
    """
    Point on Baby Jubjub with canonical coordinates in [0, p).

    Construction only checks that the coordinates are canonical integers;
    curve membership is a separate question (``on_curve``), answered by
    whoever accepts points from the outside (the codec, the serializer).
    """

    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int) -> None:
        if isinstance(x, bool) or isinstance(y, bool):
            raise InvalidPoint("point coordinates must be integers")
        if not isinstance(x, int) or not isinstance(y, int):
            raise InvalidPoint("point coordinates must be integers")
        if not (0 <= x < FIELD_PRIME and 0 <= y < FIELD_PRIME):
            raise InvalidPoint("point coordinate outside the base field")
        self.x = x
        self.y = y

    # constructors -----------------------------------------------------------
    @classmethod
    def identity(cls) -> Point:
        """Neutral element (0, 1)."""
        return cls(0, 1)

    # predicates -------------------------------------------------------------
    def on_curve(self) -> bool:
        p = FIELD_PRIME
        x2 = self.x * self.x % p
        y2 = self.y * self.y % p
        return (A * x2 + y2) % p == (1 + D * x2 * y2) % p

    def is_identity(self) -> bool:
        return self.x == 0 and self.y == 1

    # group operations -------------------------------------------------------
    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        p = FIELD_PRIME
        x1, y1, x2, y2 = self.x, self.y, o.x, o.y

        dxy = D * x1 * x2 % p * y1 * y2 % p
        num_x = (x1 * y2 + y1 * x2) % p
        num_y = (y1 * y2 - A * x1 * x2) % p
        den_x = (1 + dxy) % p
        den_y = (1 - dxy) % p

        # one inversion for both denominators
        inv = inv_mod(den_x * den_y)
        return Point(num_x * den_y % p * inv % p, num_y * den_x % p * inv % p)

    def __neg__(self) -> Point:
        return Point((-self.x) % FIELD_PRIME, self.y)

    def __sub__(self, o: Point) -> Point:
        return self + (-o)

    def __rmul__(self, k: Union[Scalar, int]) -> Point:
        if isinstance(k, Scalar):
            return self.multiply(k.value)
        if isinstance(k, int) and not isinstance(k, bool):
            return self.multiply(k)
        return NotImplemented

    def multiply(self, k: int) -> Point:
        """
        Scalar multiplication  k · self  by right-to-left double-and-add.

        *k* is used as given (no reduction), which matters for the
        unreduced secret scalars of key derivation.
        """
        if k < 0:
            return (-self).multiply(-k)
        result = Point.identity()
        addend = self
        while k:
            if k & 1:
                result = result + addend
            addend = addend + addend
            k >>= 1
        return result

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        return self.x == o.x and self.y == o.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


def in_curve(point: Point) -> bool:
    return point.on_curve()


# ── module-level generators ─────────────────────────────────────────────
BASE8 = Point(
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)
"""Generator of the prime-order subgroup (8 × the curve generator)."""
