import pytest

from conftest import POSEIDON5_1_TO_5
from maci_signer.blake import BLOCK_BYTES, Blake512, blake512
from maci_signer.field import FIELD_PRIME
from maci_signer.poseidon import MAX_INPUTS, N_ROUNDS_F, N_ROUNDS_P, parameters, poseidon, poseidon5


# ── BLAKE-512 ───────────────────────────────────────────────────────────

def test_blake512_empty():
    assert blake512(b"").hex() == (
        "a8cfbbd73726062df0c6864dda65defe58ef0cc52a5625090fa17601e1eecd1b"
        "628e94f396ae402a00acc9eab77b4d4c2e852aaaa25a636d80af3fc7913ef5b8"
    )


def test_blake512_quick_brown_fox():
    digest = blake512(b"The quick brown fox jumps over the lazy dog")
    assert digest.hex() == (
        "1f7e26f63b6ad25a0896fd978fd050a1766391d2fd0471a77afb975e5034b7ad"
        "2d9ccf8dfb47abbbe656e1b82fbc634ba42ce186e8dc5e1ce09a885d41f43451"
    )


def test_blake512_is_not_blake2b():
    import hashlib
    assert blake512(b"") != hashlib.blake2b(b"").digest()


def test_incremental_matches_one_shot():
    data = bytes(range(256)) * 3
    h = Blake512()
    for i in range(0, len(data), 50):
        h.update(data[i:i + 50])
    assert h.digest() == blake512(data)
    assert h.copy().hexdigest() == blake512(data).hex()


@pytest.mark.parametrize("length", [111, 112, BLOCK_BYTES - 1, BLOCK_BYTES, BLOCK_BYTES + 1])
def test_padding_boundaries_give_distinct_digests(length):
    digest = blake512(b"\x00" * length)
    assert len(digest) == 64
    assert digest != blake512(b"\x00" * (length + 1))


# ── Poseidon ────────────────────────────────────────────────────────────

def test_poseidon_two_inputs_known_answer():
    assert poseidon([1, 2]) == (
        7853200120776062878684798364095072458815029376092732009249414926327459813530
    )


def test_poseidon_parameter_shapes():
    constants, mds = parameters(6)
    assert len(constants) == (N_ROUNDS_F + N_ROUNDS_P[4]) * 6
    assert len(mds) == 6 and all(len(row) == 6 for row in mds)
    assert all(0 <= c < FIELD_PRIME for c in constants)


def test_poseidon5_known_answer():
    assert poseidon5(1, 2, 3, 4, 5) == POSEIDON5_1_TO_5


def test_poseidon5_matches_generic_form():
    assert poseidon5(1, 2, 3, 4, 5) == poseidon([1, 2, 3, 4, 5])
    assert 0 <= poseidon5(1, 2, 3, 4, 5) < FIELD_PRIME


def test_poseidon_is_order_sensitive():
    assert poseidon([1, 2]) != poseidon([2, 1])


@pytest.mark.parametrize("inputs", [[], [0] * (MAX_INPUTS + 1), [-1], [True], ["1"]])
def test_poseidon_rejects_bad_inputs(inputs):
    with pytest.raises(ValueError):
        poseidon(inputs)
