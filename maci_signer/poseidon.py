"""
Poseidon hash over the BN254 scalar field, circomlib parameterisation.

Width *t* = number of inputs + 1, S-box x⁵, 8 full rounds and a
width-dependent number of partial rounds.  The sponge state starts as
``[0, in_1, …, in_n]`` and the digest is ``state[0]`` after the
permutation, exactly as circomlib's ``poseidon`` and the
``poseidon-lite`` package compute it.

Round constants and the Cauchy MDS matrix are not embedded: they are
regenerated from the Grain LFSR seeded with the parameter tuple
(field=prime, sbox=x⁵, n=254, t, R_F, R_P), which is how the reference
parameter script produced circomlib's tables.  Generation is cached per
width.

References
----------
- Grassi, Khovratovich, Rechberger, Roy, Schofnegger (2021).
  "Poseidon: A New Hash Function for Zero-Knowledge Proof Systems."
  USENIX Security 2021, Appendix F (Grain LFSR).
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

from .field import FIELD_PRIME, inv_mod

FIELD_BITS = 254
N_ROUNDS_F = 8
# partial rounds indexed by t - 2 (t = 2 … 17)
N_ROUNDS_P = (56, 57, 56, 60, 60, 63, 64, 63, 60, 66, 60, 65, 70, 60, 64, 68)
MAX_INPUTS = len(N_ROUNDS_P)


# ── Grain LFSR ──────────────────────────────────────────────────────────
class _Grain:
    """80-bit Grain LFSR in self-shrinking mode."""

    def __init__(self, t: int, r_f: int, r_p: int) -> None:
        bits: List[int] = []
        for value, width in (
            (1, 2),             # prime field
            (0, 4),             # x^alpha S-box
            (FIELD_BITS, 12),
            (t, 12),
            (r_f, 10),
            (r_p, 10),
        ):
            bits.extend(int(b) for b in format(value, f"0{width}b"))
        bits.extend([1] * 30)
        self._state = bits
        for _ in range(160):
            self._clock()

    def _clock(self) -> int:
        s = self._state
        new = s[62] ^ s[51] ^ s[38] ^ s[23] ^ s[13] ^ s[0]
        s.pop(0)
        s.append(new)
        return new

    def _bit(self) -> int:
        # keep the second bit of a pair only when the first one is set
        while True:
            first = self._clock()
            second = self._clock()
            if first:
                return second

    def integer(self, n_bits: int) -> int:
        v = 0
        for _ in range(n_bits):
            v = (v << 1) | self._bit()
        return v

    def field_element(self) -> int:
        """Rejection-sampled element of F_p."""
        while True:
            v = self.integer(FIELD_BITS)
            if v < FIELD_PRIME:
                return v


@lru_cache(maxsize=None)
def parameters(t: int) -> Tuple[Tuple[int, ...], Tuple[Tuple[int, ...], ...]]:
    """Round constants (flat, ``(R_F + R_P) · t``) and MDS matrix for width *t*."""
    if not 2 <= t <= MAX_INPUTS + 1:
        raise ValueError(f"unsupported Poseidon width t={t}")
    p = FIELD_PRIME
    r_p = N_ROUNDS_P[t - 2]
    grain = _Grain(t, N_ROUNDS_F, r_p)

    constants = tuple(
        grain.field_element() for _ in range((N_ROUNDS_F + r_p) * t)
    )

    # Cauchy matrix  M[i][j] = 1 / (x_i + y_j)  from distinct samples
    while True:
        samples = [grain.integer(FIELD_BITS) % p for _ in range(2 * t)]
        if len(set(samples)) != 2 * t:
            continue
        xs, ys = samples[:t], samples[t:]
        if any((x + y) % p == 0 for x in xs for y in ys):
            continue
        mds = tuple(
            tuple(inv_mod(x + y) for y in ys) for x in xs
        )
        return constants, mds


# ── permutation ─────────────────────────────────────────────────────────
def poseidon(inputs: Sequence[int]) -> int:
    """Hash 1 … 16 field elements to one field element."""
    n = len(inputs)
    if not 1 <= n <= MAX_INPUTS:
        raise ValueError(f"Poseidon takes 1 to {MAX_INPUTS} inputs, got {n}")
    for x in inputs:
        if isinstance(x, bool) or not isinstance(x, int) or x < 0:
            raise ValueError("Poseidon inputs must be non-negative integers")

    p = FIELD_PRIME
    t = n + 1
    r_p = N_ROUNDS_P[t - 2]
    constants, mds = parameters(t)
    half_f = N_ROUNDS_F // 2

    state = [0] + [x % p for x in inputs]
    for r in range(N_ROUNDS_F + r_p):
        base = r * t
        state = [(s + constants[base + i]) % p for i, s in enumerate(state)]
        if r < half_f or r >= half_f + r_p:
            state = [pow(s, 5, p) for s in state]
        else:
            state[0] = pow(state[0], 5, p)
        state = [
            sum(row[j] * state[j] for j in range(t)) % p for row in mds
        ]
    return state[0]


def poseidon5(a: int, b: int, c: int, d: int, e: int) -> int:
    """Five-input Poseidon (t = 6), the EdDSA challenge hash."""
    return poseidon((a, b, c, d, e))
