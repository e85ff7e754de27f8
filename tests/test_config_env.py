import asyncio
from pathlib import Path

from skyline_config.adapters import config_env
from skyline_config.adapters.cache import FileKeyValueStore, KeyValueConfigurationCache
from skyline_config.adapters.http_record_store import HttpRecordStore
from skyline_config.adapters.remote import NullRecordStore
from skyline_config.core.schema import DEFAULT_CONFIG, ConfigurationSource


def _patch_env(monkeypatch, **values):
    defaults = {
        "CACHE_DIR": Path("/tmp/skyline-test"),
        "BASELINE_PATH": "",
        "REMOTE_URL": "",
        "REMOTE_TOKEN": "",
        "REMOTE_TIMEOUT": 2.0,
        "CONFIG_TYPE": "BoardingPassConfig",
        "DEBUG": False,
        "LOG_LEVEL": "WARNING",
    }
    defaults.update(values)
    for name, value in defaults.items():
        monkeypatch.setattr(config_env.env_config, name, value)


def test_load_app_config(monkeypatch, tmp_path):
    _patch_env(monkeypatch, CACHE_DIR=tmp_path, BASELINE_PATH=str(tmp_path / "b.json"), DEBUG=True)
    app_config = config_env.load_app_config()

    assert app_config.cache_dir == tmp_path
    assert app_config.baseline_path == tmp_path / "b.json"
    assert app_config.remote_timeout == 2.0
    assert app_config.log_level == "DEBUG"


def test_record_store_selection(monkeypatch):
    _patch_env(monkeypatch)
    assert isinstance(config_env.build_record_store(config_env.load_app_config()), NullRecordStore)

    _patch_env(monkeypatch, REMOTE_URL="https://records.test", REMOTE_TOKEN="t")
    store = config_env.build_record_store(config_env.load_app_config())
    assert isinstance(store, HttpRecordStore)
    asyncio.run(store.close())


def test_offline_resolver_uses_cache_dir(monkeypatch, tmp_path):
    _patch_env(monkeypatch, CACHE_DIR=tmp_path)
    rules = DEFAULT_CONFIG.validation_rules.model_copy(update={"gate_pattern": "^G$"})
    cached = DEFAULT_CONFIG.model_copy(update={"validation_rules": rules})
    KeyValueConfigurationCache(FileKeyValueStore(tmp_path)).write(cached)

    resolver = config_env.build_resolver(config_env.load_app_config())
    assert resolver.current == DEFAULT_CONFIG

    assert asyncio.run(resolver.reconcile()) is ConfigurationSource.CACHE
    assert resolver.current == cached
