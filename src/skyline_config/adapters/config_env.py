"""Env configuration adapter producing AppConfig and a wired resolver."""

from __future__ import annotations

from pathlib import Path

from ..config import config as env_config
from ..core.config_model import AppConfig
from ..core.ports import RecordStore
from ..core.resolver import ConfigurationResolver
from .baseline import BundledBaselineLoader
from .cache import FileKeyValueStore, KeyValueConfigurationCache
from .http_record_store import HttpRecordStore
from .remote import NullRecordStore, RecordStoreOverrideSource


def load_app_config() -> AppConfig:
    return AppConfig(
        cache_dir=Path(env_config.CACHE_DIR),
        baseline_path=Path(env_config.BASELINE_PATH) if env_config.BASELINE_PATH else None,
        remote_url=env_config.REMOTE_URL,
        remote_token=env_config.REMOTE_TOKEN,
        remote_timeout=env_config.REMOTE_TIMEOUT,
        config_type=env_config.CONFIG_TYPE,
        debug=env_config.DEBUG,
        log_level="DEBUG" if env_config.DEBUG else env_config.LOG_LEVEL,
    )


def build_record_store(app_config: AppConfig) -> RecordStore:
    if not app_config.remote_url:
        return NullRecordStore()
    return HttpRecordStore(
        app_config.remote_url,
        token=app_config.remote_token or None,
        timeout=app_config.remote_timeout,
    )


def build_resolver(
    app_config: AppConfig, store: RecordStore | None = None
) -> ConfigurationResolver:
    if store is None:
        store = build_record_store(app_config)
    return ConfigurationResolver(
        baseline=BundledBaselineLoader(app_config.baseline_path),
        cache=KeyValueConfigurationCache(FileKeyValueStore(app_config.cache_dir)),
        remote=RecordStoreOverrideSource(store, config_type=app_config.config_type),
        fetch_timeout=app_config.remote_timeout,
    )
