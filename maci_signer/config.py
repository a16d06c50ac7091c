"""
Runtime settings for a signer process.

Values come from the environment (prefix ``MACI_SIGNER_``) or a ``.env``
file next to the working directory.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .channel import Channel
from .keystore import DEFAULT_STORAGE_KEY, KeyStore
from .protocol import SignerSession
from .storage import BlobStore, JsonFileBlobStore, MemoryBlobStore


class SignerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MACI_SIGNER_",
        env_file=".env",
        extra="ignore",
    )

    # Storage; no path means keys live in memory only
    storage_path: Optional[Path] = None
    storage_key: str = DEFAULT_STORAGE_KEY

    # Signing
    offload_signing: bool = False

    # Logging
    log_level: str = "INFO"


def configure_logging(settings: SignerSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_blob_store(settings: SignerSettings) -> BlobStore:
    if settings.storage_path is None:
        return MemoryBlobStore()
    return JsonFileBlobStore(settings.storage_path)


def open_keystore(settings: SignerSettings) -> KeyStore:
    """Build the configured key store and run its startup load."""
    keystore = KeyStore(build_blob_store(settings), storage_key=settings.storage_key)
    keystore.load_or_init()
    return keystore


def open_session(
    settings: SignerSettings,
    keystore: KeyStore,
    channel: Channel,
) -> SignerSession:
    return SignerSession(keystore, channel, offload_signing=settings.offload_signing)
