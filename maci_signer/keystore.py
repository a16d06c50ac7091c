"""
Ordered, append-only collection of MACI keypairs.

Persisted form: a JSON array of ``macisk.`` strings stored under a single
key of a :class:`~maci_signer.storage.BlobStore`.  The list is read once
at startup and rewritten in full whenever a keypair is added.  The active
selection is session state only and is not persisted.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

from .errors import InvalidFormat, StorageReadFailure
from .keys import Keypair, PrivKey
from .storage import BlobStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "keys"


class KeyStore:
    """
    Keypairs plus the index of the active one.

    Lifecycle:
    1. ``load_or_init()``   → restore from storage, or bootstrap one key
    2. ``create_keypair()`` → append, persist, select
    3. ``select_keypair(i)``
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._store = store
        self._storage_key = storage_key
        self._keypairs: List[Keypair] = []
        self._selected: Optional[int] = None
        self._loaded = False

    # ── startup ────────────────────────────────────────────────────────

    def load_or_init(self) -> None:
        """
        Restore the persisted key list.

        Any read failure (absent, empty, malformed) is logged and replaced
        by exactly one freshly generated keypair, which is persisted and
        selected.  If that write fails the error propagates and the store
        stays unloaded.
        """
        try:
            keypairs = self._read()
        except StorageReadFailure as exc:
            logger.warning("Key list not restored (%s); generating a new keypair", exc)
            self._keypairs = []
            self._selected = None
            self._loaded = True
            try:
                self.create_keypair()
            except Exception:
                self._loaded = False
                raise
            return

        self._keypairs = keypairs
        self._selected = 0
        self._loaded = True
        logger.info("Restored %d keypair(s)", len(keypairs))

    def _read(self) -> List[Keypair]:
        raw = self._store.get(self._storage_key)
        if raw is None:
            raise StorageReadFailure("no keypair found")
        try:
            serialized = json.loads(raw)
        except ValueError as exc:
            raise StorageReadFailure("key list is not valid JSON") from exc
        if not isinstance(serialized, list) or not serialized:
            raise StorageReadFailure("key list is empty or not an array")
        try:
            return [Keypair(PrivKey.deserialize(s)) for s in serialized]
        except InvalidFormat as exc:
            raise StorageReadFailure(f"invalid key in list: {exc}") from exc

    # ── mutation ───────────────────────────────────────────────────────

    def create_keypair(self) -> Keypair:
        """Append a fresh keypair, persist the whole list, select it."""
        self._require_loaded()
        keypair = Keypair.generate()
        serialized = [k.priv_key.serialize() for k in self._keypairs]
        serialized.append(keypair.priv_key.serialize())

        # write first: a failed write leaves the in-memory list untouched
        self._store.set(self._storage_key, json.dumps(serialized))

        self._keypairs.append(keypair)
        self._selected = len(self._keypairs) - 1
        logger.info(
            "Created keypair #%d %s", self._selected + 1, keypair.pub_key.serialize(),
        )
        return keypair

    def select_keypair(self, index: int) -> Keypair:
        self._require_loaded()
        if not 0 <= index < len(self._keypairs):
            raise IndexError(f"no keypair at index {index}")
        self._selected = index
        return self._keypairs[index]

    # ── accessors ──────────────────────────────────────────────────────

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def keypairs(self) -> Tuple[Keypair, ...]:
        return tuple(self._keypairs)

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    @property
    def selected(self) -> Keypair:
        self._require_loaded()
        if self._selected is None:
            raise RuntimeError("no keypair selected")
        return self._keypairs[self._selected]

    def __len__(self) -> int:
        return len(self._keypairs)

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("key store not loaded; call load_or_init() first")

    def __repr__(self) -> str:
        return f"KeyStore({len(self._keypairs)} keypairs, selected={self._selected})"
