"""
Key-value blob stores for persisted key material.

The key store only needs ``get(key) -> str | None`` and
``set(key, value)``.  Two implementations ship here:

- ``MemoryBlobStore`` for tests and ephemeral sessions.
- ``JsonFileBlobStore``: one JSON object on disk, rewritten atomically
  (temp file, fsync, ``os.replace``) so a crash mid-write never leaves a
  truncated document behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union, runtime_checkable

from .errors import StorageReadFailure

logger = logging.getLogger(__name__)


@runtime_checkable
class BlobStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryBlobStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBlobStore:
    """File-backed store; the whole document is rewritten on every ``set``."""

    def __init__(self, path: Union[str, Path], *, mode: int = 0o600) -> None:
        self.path = Path(path)
        self.mode = mode

    def _read_document(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageReadFailure(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(doc, dict):
            raise StorageReadFailure(f"{self.path} does not hold a JSON object")
        return doc

    def get(self, key: str) -> Optional[str]:
        value = self._read_document().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageReadFailure(f"value under {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            doc = self._read_document()
        except StorageReadFailure:
            logger.warning("Discarding unreadable store at %s", self.path)
            doc = {}
        doc[key] = value
        _atomic_write_json(self.path, doc, mode=self.mode)


def _atomic_write_json(path: Path, doc: dict, *, mode: int = 0o600) -> None:
    d = path.parent
    d.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp.", dir=str(d))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(doc, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        try:
            os.chmod(tmp, mode)
        except OSError:
            logger.debug("Could not chmod %s", tmp)
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)
