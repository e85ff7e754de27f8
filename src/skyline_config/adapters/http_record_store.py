"""HTTP record store client.

Talks to a small REST record service:

    GET  /records/{record_type}?configType=...  -> {"records": [...]}
    POST /records/{record_type}                 <- one record

Each record is ``{"configType": str, "configData": str, "lastModified":
ISO-8601}``; ``configData`` carries the configuration JSON as a string.

Usage:
    async with HttpRecordStore("https://config.example.com", token="...") as store:
        source = RecordStoreOverrideSource(store)
        override = await source.fetch_override()
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from ..core.errors import TransientRemoteError
from ..core.ports import RemoteRecord

logger = logging.getLogger(__name__)


class HttpRecordStore:
    """Async record store over httpx.

    Transport failures, error statuses and unreadable response bodies all
    raise ``TransientRemoteError``. A single malformed entry inside an
    otherwise valid response is skipped.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpRecordStore":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise TransientRemoteError(f"{method} {path} failed: {exc}") from exc

        if response.status_code >= 400:
            raise TransientRemoteError(
                f"{method} {path} returned HTTP {response.status_code}"
            )
        return response

    async def query(self, record_type: str, config_type: str) -> list[RemoteRecord]:
        response = await self._request(
            "GET", f"/records/{record_type}", params={"configType": config_type}
        )
        try:
            body = response.json()
            entries = body["records"]
        except (ValueError, KeyError, TypeError) as exc:
            raise TransientRemoteError(f"Unreadable record listing: {exc}") from exc
        if not isinstance(entries, list):
            raise TransientRemoteError("Record listing is not a list")

        records = []
        for entry in entries:
            record = _parse_record(entry)
            if record is None:
                logger.warning("Skipping malformed record entry from %s", record_type)
                continue
            if record.config_type == config_type:
                records.append(record)
        return records

    async def create(self, record_type: str, record: RemoteRecord) -> None:
        await self._request(
            "POST",
            f"/records/{record_type}",
            json={
                "configType": record.config_type,
                "configData": record.payload.decode("utf-8"),
                "lastModified": record.last_modified.isoformat(),
            },
        )


def _parse_record(entry: Any) -> RemoteRecord | None:
    try:
        last_modified = datetime.fromisoformat(entry["lastModified"])
        payload = entry["configData"].encode("utf-8")
        config_type = entry["configType"]
    except (KeyError, TypeError, AttributeError, ValueError):
        return None
    if last_modified.tzinfo is None:
        # naive timestamps are UTC
        last_modified = last_modified.replace(tzinfo=timezone.utc)
    return RemoteRecord(config_type=config_type, payload=payload, last_modified=last_modified)
