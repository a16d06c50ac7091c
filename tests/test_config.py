import logging

from maci_signer.config import (
    SignerSettings,
    build_blob_store,
    configure_logging,
    open_keystore,
    open_session,
)
from maci_signer.channel import MemoryChannel
from maci_signer.storage import JsonFileBlobStore, MemoryBlobStore


def test_defaults(monkeypatch):
    for name in ("STORAGE_PATH", "STORAGE_KEY", "OFFLOAD_SIGNING", "LOG_LEVEL"):
        monkeypatch.delenv(f"MACI_SIGNER_{name}", raising=False)
    settings = SignerSettings(_env_file=None)
    assert settings.storage_path is None
    assert settings.storage_key == "keys"
    assert settings.offload_signing is False
    assert isinstance(build_blob_store(settings), MemoryBlobStore)


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("MACI_SIGNER_STORAGE_PATH", str(tmp_path / "keys.json"))
    monkeypatch.setenv("MACI_SIGNER_STORAGE_KEY", "maci")
    monkeypatch.setenv("MACI_SIGNER_OFFLOAD_SIGNING", "true")
    settings = SignerSettings(_env_file=None)
    assert settings.storage_path == tmp_path / "keys.json"
    assert settings.offload_signing is True
    store = build_blob_store(settings)
    assert isinstance(store, JsonFileBlobStore)

    keystore = open_keystore(settings)
    assert keystore.loaded and len(keystore) == 1
    assert store.get("maci") is not None


def test_configure_logging_accepts_level_names():
    configure_logging(SignerSettings(_env_file=None, log_level="debug"))
    configure_logging(SignerSettings(_env_file=None, log_level="nonsense"))
    assert logging.getLogger("maci_signer").getEffectiveLevel() <= logging.WARNING


async def test_open_session_passes_offload_flag(monkeypatch):
    monkeypatch.setenv("MACI_SIGNER_OFFLOAD_SIGNING", "1")
    settings = SignerSettings(_env_file=None)
    keystore = open_keystore(settings.model_copy(update={"storage_path": None}))
    ours, _ = MemoryChannel.pair()

    session = open_session(settings, keystore, ours)
    assert session.offload_signing is True

    plain = open_session(SignerSettings(_env_file=None, offload_signing=False), keystore, ours)
    assert plain.offload_signing is False
