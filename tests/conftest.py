import pytest

from maci_signer.keystore import KeyStore
from maci_signer.poseidon import poseidon5
from maci_signer.signing import Signature
from maci_signer.storage import MemoryBlobStore

# circomlib eddsa test vector: "Sign (using Poseidon) a single 10 bytes from 0 to 9"
GOLDEN_SEED = bytes.fromhex(
    "0001020304050607080900010203040506070809000102030405060708090001"
)
GOLDEN_MESSAGE = int.from_bytes(bytes.fromhex("000102030405060708090000"), "little")
GOLDEN_PUBKEY = (
    13277427435165878497778222415993513565335242147425444199013288855685581939618,
    13622229784656158136036771217484571176836296686641868549125388198837476602820,
)
GOLDEN_R8 = (
    11384336176656855268977457483345535180380036354188103142384839473266348197733,
    15383486972088797283337779941324724402501462225528836549661220478783371668959,
)
GOLDEN_S = 1672775540645840396591609181675628451599263765380031905495115170613215233181
GOLDEN_PACKED_R8_LE = "dfedb4315d3f2eb4de2d3c510d7a987dcab67089c8ace06308827bf5bcbe02a2"
GOLDEN_S_LE = "9d043ece562a8f82bfc0adb640c0107a7d3a27c1c7c1a6179a0da73de5c1b203"

# regression vector: seed 00…01, message 42
SEED_ONE = bytes(31) + b"\x01"
SEED_ONE_MESSAGE = 42
SEED_ONE_PUBKEY = (
    1891156797631087029347893674931101305929404954783323547727418062433377377293,
    14780632341277755899330141855966417738975199657954509255716508264496764475094,
)
SEED_ONE_R8 = (
    19683818786600905195457795216865980186820021056616665452259960403374809525345,
    14453060069758513059615660208085670675347815791784770425641586370433787623736,
)
SEED_ONE_S = 1074766317744873512005457099209733155672454491010751108654003203774774219266

# circomlib poseidon test: five inputs 1..5 (t = 6, the challenge width)
POSEIDON5_1_TO_5 = (
    6183221330272524995739186171720101788151706631170188140075976616310159254464
)


# ── reference verifier ──────────────────────────────────────────────────
# Standalone curve constants and affine arithmetic on plain tuples;
# nothing here imports maci_signer.curve.

_P = 21888242871839275222246405745257275088548364400416034343698204186575808495617
_A = 168700
_D = 168696
_BASE8 = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)


def _on_curve(pt):
    x, y = pt
    x2, y2 = x * x % _P, y * y % _P
    return (_A * x2 + y2 - 1 - _D * x2 * y2) % _P == 0


def _add(p1, p2):
    x1, y1 = p1
    x2, y2 = p2
    t = _D * x1 * x2 * y1 * y2 % _P
    x3 = (x1 * y2 + y1 * x2) * pow(1 + t, _P - 2, _P) % _P
    y3 = (y1 * y2 - _A * x1 * x2) * pow(1 - t, _P - 2, _P) % _P
    return x3, y3


def _mul(pt, k):
    acc = (0, 1)
    while k:
        if k & 1:
            acc = _add(acc, pt)
        pt = _add(pt, pt)
        k >>= 1
    return acc


def verify(signature: Signature, pub_key, message: int) -> bool:
    """Verifier equation  S·Base8 == R8 + 8c·A  (the peer's check)."""
    r8 = (signature.R8.x, signature.R8.y)
    a = tuple(pub_key)
    if not _on_curve(r8) or not _on_curve(a):
        return False
    c = poseidon5(r8[0], r8[1], a[0], a[1], message)
    return _mul(_BASE8, signature.S) == _add(r8, _mul(a, 8 * c))


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
def keystore(blob_store):
    ks = KeyStore(blob_store)
    ks.load_or_init()
    return ks
