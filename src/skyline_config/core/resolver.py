"""Layered configuration resolution.

Owns the single current configuration and reconciles it from three
sources in authority order Remote > Cache > Baseline:

    __init__        baseline (or built-in default) adopted synchronously
    reconcile()     remote override, else cached copy, else keep baseline
    publish_override()  push a new override remotely, then adopt + cache

Every write goes through one asyncio lock, so reconciliation and publishing
never interleave. The slot itself is swapped under a thread lock and
readers on any thread always see a complete value.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Callable

from ..async_bridge import AsyncBridge
from ..field_accessor import FieldAccessor
from .errors import TransientRemoteError
from .ports import (
    BaselineLoader,
    ConfigurationObserver,
    LocalCacheStore,
    RemoteOverrideSource,
)
from .schema import DEFAULT_CONFIG, BoardingPassConfig, ConfigurationSource
from .state_machine import ResolverEvent, ResolverState, ResolverStateMachine

logger = logging.getLogger(__name__)

_KEPT_EVENTS = {
    ConfigurationSource.BASELINE: ResolverEvent.BASELINE_KEPT,
    ConfigurationSource.CACHE: ResolverEvent.CACHE_KEPT,
    ConfigurationSource.REMOTE: ResolverEvent.REMOTE_KEPT,
}


class ConfigurationResolver:
    """Produces the authoritative configuration and notifies observers."""

    def __init__(
        self,
        baseline: BaselineLoader,
        cache: LocalCacheStore,
        remote: RemoteOverrideSource,
        fetch_timeout: float = 10.0,
    ):
        self._cache = cache
        self._remote = remote
        self._fetch_timeout = fetch_timeout
        self._state = ResolverStateMachine()
        self._slot_lock = threading.Lock()
        self._write_lock: asyncio.Lock | None = None
        self._observers: list[ConfigurationObserver] = []
        self._reconcile_future: Future | None = None

        config = baseline.load()
        if config is None:
            logger.warning("Bundled configuration unavailable, using built-in defaults")
            config = DEFAULT_CONFIG
        self._current = config
        self._source = ConfigurationSource.BASELINE
        self._state.transition(ResolverEvent.INITIALIZE)
        logger.info("Configuration initialized from baseline")

    @property
    def current(self) -> BoardingPassConfig:
        with self._slot_lock:
            return self._current

    @property
    def source(self) -> ConfigurationSource:
        with self._slot_lock:
            return self._source

    @property
    def state(self) -> ResolverState:
        return self._state.state

    @property
    def fields(self) -> FieldAccessor:
        return FieldAccessor(self)

    def subscribe(self, observer: ConfigurationObserver) -> Callable[[], None]:
        """Register observer; returns a callable that unregisters it.

        Observers run on the thread that performed the write, after the new
        value is already visible through ``current``.
        """
        with self._slot_lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._slot_lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def start(self, bridge: AsyncBridge) -> Future:
        """Schedule the startup reconciliation on bridge without blocking.

        Only one reconciliation is started per resolver; later calls, from
        any thread, return the future of the first one.
        """
        with self._slot_lock:
            if self._reconcile_future is None:
                self._reconcile_future = bridge.submit(self.reconcile())
            return self._reconcile_future

    async def reconcile(self) -> ConfigurationSource:
        """Upgrade to the highest-authority configuration available."""
        async with self._serialized():
            self._state.transition(ResolverEvent.RECONCILE)

            override = await self._fetch_override()
            if override is not None:
                self._adopt(override, ConfigurationSource.REMOTE, ResolverEvent.REMOTE_ADOPTED)
                self._cache.write(override)
                return ConfigurationSource.REMOTE

            cached = self._cache.read()
            if cached is not None:
                self._adopt(cached, ConfigurationSource.CACHE, ResolverEvent.CACHE_ADOPTED)
                return ConfigurationSource.CACHE

            source = self.source
            self._state.transition(_KEPT_EVENTS[source])
            logger.info("No override or cached configuration, keeping %s", source.value)
            return source

    async def publish_override(self, config: BoardingPassConfig) -> None:
        """Publish config as the remote override and adopt it.

        Raises:
            TransientRemoteError: remote store rejected or did not answer;
                the current configuration and the cache are left untouched.
        """
        async with self._serialized():
            try:
                await self._remote.publish_override(config)
            except TransientRemoteError:
                logger.error("Failed to publish configuration override", exc_info=True)
                raise
            self._adopt(config, ConfigurationSource.REMOTE, ResolverEvent.OVERRIDE_PUBLISHED)
            self._cache.write(config)
            logger.info("Published configuration override")

    async def _fetch_override(self) -> BoardingPassConfig | None:
        try:
            override = await asyncio.wait_for(
                self._remote.fetch_override(), timeout=self._fetch_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Remote override fetch timed out after %.1fs", self._fetch_timeout)
            return None
        except TransientRemoteError as exc:
            logger.warning("Remote override unavailable: %s", exc)
            return None
        except Exception:
            logger.exception("Remote override fetch failed unexpectedly")
            return None
        if override is None:
            logger.info("No usable remote override found")
        return override

    def _serialized(self) -> asyncio.Lock:
        # Bound to the event loop of the first writer
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        return self._write_lock

    def _adopt(
        self,
        config: BoardingPassConfig,
        source: ConfigurationSource,
        event: ResolverEvent,
    ) -> None:
        with self._slot_lock:
            changed = config != self._current
            self._current = config
            self._source = source
            self._state.transition(event)
            observers = list(self._observers)

        logger.info("Configuration adopted from %s", source.value)
        if not changed:
            return
        for observer in observers:
            try:
                observer(config, source)
            except Exception:
                logger.exception("Configuration observer %r failed", observer)
