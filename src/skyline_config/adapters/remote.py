"""Remote override source backed by a record store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from ..core.errors import DecodeError, TransientRemoteError
from ..core.ports import RecordStore, RemoteRecord
from ..core.schema import BoardingPassConfig, decode_configuration, encode_configuration

logger = logging.getLogger(__name__)

CONFIG_RECORD_TYPE = "Configuration"
DEFAULT_CONFIG_TYPE = "BoardingPassConfig"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStoreOverrideSource:
    """Reads and writes override records of one configuration type.

    Several override records may exist because publishing always creates a
    new record. The newest ``last_modified`` that decodes wins; records
    that fail to decode are skipped. When none decodes the result is
    ``None``, not an error.
    """

    def __init__(
        self,
        store: RecordStore,
        config_type: str = DEFAULT_CONFIG_TYPE,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._config_type = config_type
        self._clock = clock

    async def fetch_override(self) -> BoardingPassConfig | None:
        records = await self._store.query(CONFIG_RECORD_TYPE, self._config_type)
        # sorted() is stable: equal timestamps keep the store's order
        candidates = sorted(records, key=lambda r: r.last_modified, reverse=True)

        for record in candidates:
            try:
                config = decode_configuration(record.payload)
            except DecodeError as exc:
                logger.warning(
                    "Skipping override record from %s: %s",
                    record.last_modified.isoformat(),
                    exc,
                )
                continue
            logger.info(
                "Found override record from %s (%d candidates)",
                record.last_modified.isoformat(),
                len(candidates),
            )
            return config

        return None

    async def publish_override(self, config: BoardingPassConfig) -> None:
        record = RemoteRecord(
            config_type=self._config_type,
            payload=encode_configuration(config, pretty=True),
            last_modified=self._clock(),
        )
        await self._store.create(CONFIG_RECORD_TYPE, record)


class NullRecordStore:
    """Record store used when no remote service is configured.

    Every call fails as unreachable so resolution falls through to the
    local cache and the baseline.
    """

    async def query(self, record_type: str, config_type: str) -> list[RemoteRecord]:
        raise TransientRemoteError("No remote record store configured")

    async def create(self, record_type: str, record: RemoteRecord) -> None:
        raise TransientRemoteError("No remote record store configured")

    async def close(self) -> None:
        pass
