import pytest

from skyline_config.adapters.cache import CACHE_KEY, FileKeyValueStore, KeyValueConfigurationCache
from skyline_config.core.schema import DEFAULT_CONFIG


class _FailingStore:
    def get(self, key: str):
        raise PermissionError("denied")

    def set(self, key: str, value: bytes) -> None:
        raise OSError("disk full")


def test_file_store_round_trip(tmp_path):
    store = FileKeyValueStore(tmp_path / "cache")
    assert store.get("key") is None

    store.set("key", b"one")
    store.set("key", b"two")

    assert store.get("key") == b"two"
    assert [p.name for p in (tmp_path / "cache").iterdir()] == ["key"]


def test_file_store_rejects_path_like_keys(tmp_path):
    store = FileKeyValueStore(tmp_path)
    for key in ("../escape", "..", ".hidden"):
        with pytest.raises(ValueError):
            store.set(key, b"x")


def test_cache_write_then_read(tmp_path):
    cache = KeyValueConfigurationCache(FileKeyValueStore(tmp_path))
    assert cache.read() is None

    assert cache.write(DEFAULT_CONFIG) is True
    assert cache.write(DEFAULT_CONFIG) is True

    assert cache.read() == DEFAULT_CONFIG
    assert (tmp_path / CACHE_KEY).exists()


def test_corrupt_cache_reads_as_absent(tmp_path):
    store = FileKeyValueStore(tmp_path)
    store.set(CACHE_KEY, b'{"truncated": ')
    assert KeyValueConfigurationCache(store).read() is None


def test_store_failures_are_not_raised():
    cache = KeyValueConfigurationCache(_FailingStore())
    assert cache.read() is None
    assert cache.write(DEFAULT_CONFIG) is False
