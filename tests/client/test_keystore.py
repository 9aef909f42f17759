import os
import stat

import pytest

from client.cipher import hash_private_key
from client.keystore import Credentials, PrivateKeyMissingError, PrivateKeyStore


@pytest.fixture
def store(tmp_path):
    return PrivateKeyStore(tmp_path / "nested" / "keystore.json")


def test_missing_file_loads_empty_credentials(store):
    assert store.load() == Credentials()


def test_save_and_load(store):
    store.save(Credentials(access_token="tok", private_key="pk"))
    assert store.load() == Credentials(access_token="tok", private_key="pk")


def test_saved_file_is_private(store):
    store.save(Credentials(access_token="tok", private_key="pk"))
    assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o600


def test_clear(store):
    store.save(Credentials(access_token="tok", private_key="pk"))
    store.clear()
    assert store.load() == Credentials()


def test_unreadable_file_loads_empty_credentials(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{broken")
    assert store.load() == Credentials()


def test_symmetric_key_is_hash_of_private_key():
    assert Credentials(private_key="pk").symmetric_key() == hash_private_key("pk")


@pytest.mark.parametrize("private_key", [None, ""])
def test_missing_private_key_blocks(private_key):
    with pytest.raises(PrivateKeyMissingError) as exc:
        Credentials(access_token="tok", private_key=private_key).symmetric_key()
    assert "login again" in str(exc.value)


def test_file_is_created_private(store, monkeypatch):
    old_umask = os.umask(0)
    monkeypatch.setattr(os, "chmod", lambda *args, **kwargs: None)
    try:
        store.save(Credentials(access_token="tok", private_key="pk"))
    finally:
        os.umask(old_umask)
    assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o600


def test_save_tightens_an_existing_file(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{}")
    os.chmod(store.path, 0o644)
    store.save(Credentials(access_token="tok", private_key="pk"))
    assert stat.S_IMODE(os.stat(store.path).st_mode) == 0o600
