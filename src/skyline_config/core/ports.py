"""Core ports (interfaces) for configuration resolution.

The resolver only talks to its sources through these protocols. Concrete
implementations live in ``skyline_config.adapters``; tests provide small
fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Protocol, runtime_checkable

from .schema import BoardingPassConfig, ConfigurationSource


@dataclass(frozen=True)
class RemoteRecord:
    """One override record as stored remotely."""

    config_type: str
    payload: bytes
    last_modified: datetime


@runtime_checkable
class BaselineLoader(Protocol):
    """Bundled, build-time configuration."""

    def load(self) -> BoardingPassConfig | None:
        """Return the bundled configuration, or None if unreadable."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Flat durable key -> bytes map."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes or None."""

    def set(self, key: str, value: bytes) -> None:
        """Replace the value stored under key."""


@runtime_checkable
class LocalCacheStore(Protocol):
    """Last successfully applied configuration."""

    def read(self) -> BoardingPassConfig | None:
        """Return the cached configuration, or None if absent/unreadable."""

    def write(self, config: BoardingPassConfig) -> bool:
        """Persist config; False on failure."""


@runtime_checkable
class RecordStore(Protocol):
    """Remote record transport."""

    async def query(self, record_type: str, config_type: str) -> list[RemoteRecord]:
        """Return matching records; raises TransientRemoteError."""

    async def create(self, record_type: str, record: RemoteRecord) -> None:
        """Create a new record; raises TransientRemoteError."""

    async def close(self) -> None:
        """Release transport resources."""


@runtime_checkable
class RemoteOverrideSource(Protocol):
    """Remotely managed override configuration."""

    async def fetch_override(self) -> BoardingPassConfig | None:
        """Return the authoritative override or None; raises TransientRemoteError."""

    async def publish_override(self, config: BoardingPassConfig) -> None:
        """Store config as the new override; raises TransientRemoteError."""


@runtime_checkable
class ConfigurationProvider(Protocol):
    """Anything exposing the live configuration."""

    @property
    def current(self) -> BoardingPassConfig:
        """Configuration in effect right now."""


ConfigurationObserver = Callable[[BoardingPassConfig, ConfigurationSource], None]
