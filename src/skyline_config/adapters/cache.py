"""Durable local cache of the last applied configuration."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from ..core.errors import DecodeError
from ..core.ports import KeyValueStore
from ..core.schema import BoardingPassConfig, decode_configuration, encode_configuration

logger = logging.getLogger(__name__)

CACHE_KEY = "cached_boarding_pass_config"

_KEY_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.-]*$")


class FileKeyValueStore:
    """One file per key inside a directory.

    Writes go to a temporary file in the same directory and are renamed
    over the target, so readers see either the old or the new value.
    """

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.fullmatch(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._directory / key

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class KeyValueConfigurationCache:
    """LocalCacheStore storing the encoded configuration under one key."""

    def __init__(self, store: KeyValueStore, key: str = CACHE_KEY):
        self._store = store
        self._key = key

    def read(self) -> BoardingPassConfig | None:
        try:
            data = self._store.get(self._key)
        except OSError as exc:
            logger.warning("Configuration cache not readable: %s", exc)
            return None
        if data is None:
            return None

        try:
            config = decode_configuration(data)
        except DecodeError as exc:
            logger.warning("Cached configuration rejected: %s", exc)
            return None

        logger.info("Loaded cached configuration")
        return config

    def write(self, config: BoardingPassConfig) -> bool:
        try:
            self._store.set(self._key, encode_configuration(config))
        except OSError as exc:
            logger.error("Failed to write configuration cache: %s", exc)
            return False
        logger.debug("Saved configuration to cache")
        return True
