import pytest

from maci_signer.curve import BASE8, ORDER, Point, in_curve
from maci_signer.errors import InvalidPoint
from maci_signer.field import (
    FIELD_PRIME,
    SUBORDER,
    Scalar,
    inv_mod,
    is_negative,
    legendre,
    sqrt_mod,
)


# ── Scalar ──────────────────────────────────────────────────────────────

def test_scalar_reduces_modulo_suborder():
    assert Scalar(SUBORDER + 5) == Scalar(5)
    assert Scalar(-1).value == SUBORDER - 1


def test_scalar_arithmetic():
    a, b = Scalar(7), Scalar(SUBORDER - 2)
    assert (a + b).value == 5
    assert (a - 8).value == SUBORDER - 1
    assert (3 * a).value == 21
    assert (-a + a).is_zero()


def test_scalar_bytes_le_roundtrip():
    s = Scalar(0x0102)
    data = s.to_bytes_le()
    assert len(data) == 32
    assert data[:2] == b"\x02\x01"
    assert Scalar.from_bytes_le(data) == s


# ── base field ──────────────────────────────────────────────────────────

def test_inv_mod():
    assert 12345 * inv_mod(12345) % FIELD_PRIME == 1
    with pytest.raises(ZeroDivisionError):
        inv_mod(FIELD_PRIME)


def test_legendre_and_sqrt():
    assert legendre(0) == 0
    assert legendre(4) == 1
    root = sqrt_mod(4)
    assert root == 2
    r = sqrt_mod(168700)  # a is a square on Baby Jubjub
    assert r is not None and r * r % FIELD_PRIME == 168700
    assert not is_negative(r)


def test_sqrt_of_non_residue_is_none():
    # d is a non-square on Baby Jubjub
    assert legendre(168696) == -1
    assert sqrt_mod(168696) is None


def test_is_negative_boundary():
    half = (FIELD_PRIME - 1) // 2
    assert not is_negative(half)
    assert is_negative(half + 1)
    assert is_negative(FIELD_PRIME - 1)


# ── Point ───────────────────────────────────────────────────────────────

def test_base8_on_curve():
    assert in_curve(BASE8)
    assert in_curve(Point.identity())


def test_point_rejects_noncanonical_coordinates():
    with pytest.raises(InvalidPoint):
        Point(FIELD_PRIME, 1)
    with pytest.raises(InvalidPoint):
        Point(-1, 1)
    with pytest.raises(InvalidPoint):
        Point(True, 1)


def test_off_curve_point_constructs_but_fails_membership():
    assert not in_curve(Point(1, 2))


def test_identity_is_neutral():
    assert BASE8 + Point.identity() == BASE8
    assert BASE8 - BASE8 == Point.identity()


def test_doubling_matches_small_multiples():
    double = BASE8 + BASE8
    assert BASE8.multiply(2) == double
    assert BASE8.multiply(3) == double + BASE8
    assert 3 * BASE8 == BASE8.multiply(3)
    assert Scalar(3) * BASE8 == BASE8.multiply(3)
    assert in_curve(double)


def test_base8_has_prime_order():
    assert BASE8.multiply(SUBORDER).is_identity()
    assert BASE8.multiply(ORDER).is_identity()


def test_negative_multiplier():
    assert BASE8.multiply(-2) == -(BASE8 + BASE8)
