"""
maci-signer: a mobile-signer companion for MACI voting sessions.

Holds MACI keypairs on Baby Jubjub, pairs with a voting-session peer
over a message channel, and answers its signature requests with
deterministic EdDSA-Poseidon signatures:

- **Baby Jubjub** twisted-Edwards arithmetic and 256-bit point packing
- **EdDSA-Poseidon** signing, byte-compatible with circomlib / zk-kit
- **Event-sourced session** arbitrating connect/disconnect and sign/cancel

Quick start
-----------
::

    from maci_signer import KeyStore, MemoryBlobStore, sign_message

    keystore = KeyStore(MemoryBlobStore())
    keystore.load_or_init()
    print(keystore.selected.pub_key.serialize())   # macipk.…

    sig = sign_message(keystore.selected.priv_key.seed, 42)
    print(sig.to_json())
"""

__version__ = "0.1.0"

# ── curve ───────────────────────────────────────────────────────────────
from .field import Scalar, FIELD_PRIME, SUBORDER
from .curve import Point, BASE8, in_curve
from .codec import pack_point, unpack_point

# ── hashing ─────────────────────────────────────────────────────────────
from .blake import blake512
from .poseidon import poseidon, poseidon5

# ── keys & signatures ───────────────────────────────────────────────────
from .keys import (
    PrivKey,
    PubKey,
    Keypair,
    prune_buffer,
    derive_secret_scalar,
    derive_public_key,
)
from .serialize import (
    serialize_private_key,
    deserialize_private_key,
    serialize_public_key,
    deserialize_public_key,
    is_valid_serialized_private_key,
    is_valid_serialized_public_key,
)
from .signing import Signature, Signer, check_message, sign_message

# ── persistence ─────────────────────────────────────────────────────────
from .storage import BlobStore, MemoryBlobStore, JsonFileBlobStore
from .keystore import KeyStore

# ── session ─────────────────────────────────────────────────────────────
from .state import SessionState, SignatureRequest, DISCONNECTED
from .pairing import parse_pairing_payload
from .session import reduce, fold
from .channel import Channel, MemoryChannel
from .protocol import SignerSession

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    MaciSignerError,
    InvalidFormat,
    InvalidPoint,
    InvalidMessage,
    StorageReadFailure,
    ChannelError,
    InvalidFrame,
)

__all__ = [
    # version
    "__version__",
    # curve
    "Scalar", "FIELD_PRIME", "SUBORDER", "Point", "BASE8", "in_curve",
    "pack_point", "unpack_point",
    # hashing
    "blake512", "poseidon", "poseidon5",
    # keys
    "PrivKey", "PubKey", "Keypair",
    "prune_buffer", "derive_secret_scalar", "derive_public_key",
    "serialize_private_key", "deserialize_private_key",
    "serialize_public_key", "deserialize_public_key",
    "is_valid_serialized_private_key", "is_valid_serialized_public_key",
    # signing
    "Signature", "Signer", "check_message", "sign_message",
    # persistence
    "BlobStore", "MemoryBlobStore", "JsonFileBlobStore", "KeyStore",
    # session
    "SessionState", "SignatureRequest", "DISCONNECTED",
    "parse_pairing_payload", "reduce", "fold",
    "Channel", "MemoryChannel", "SignerSession",
    # errors
    "MaciSignerError", "InvalidFormat", "InvalidPoint", "InvalidMessage",
    "StorageReadFailure", "ChannelError", "InvalidFrame",
]
