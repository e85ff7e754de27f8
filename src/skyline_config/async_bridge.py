"""Background event loop owned by whoever drives a resolver.

Reconciliation and publishing are coroutines while the CLI and UI callers
are synchronous. An ``AsyncBridge`` runs one asyncio loop in a daemon
thread for as long as its owner keeps it open; every coroutine handed to it
runs on that single loop, which is also what serializes the resolver's
writers.

    with AsyncBridge() as bridge:
        future = resolver.start(bridge)   # returns immediately
        bridge.run_sync(resolver.publish_override(config), timeout=30)
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import Any, Coroutine


class AsyncBridge:
    def __init__(self, name: str = "skyline-config-loop"):
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    def __enter__(self) -> "AsyncBridge":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def open(self) -> None:
        if self._thread is not None:
            raise RuntimeError("AsyncBridge is already open")
        loop = asyncio.new_event_loop()
        ready = threading.Event()
        self._thread = threading.Thread(
            target=self._serve, args=(loop, ready), name=self._name, daemon=True
        )
        self._thread.start()
        if not ready.wait(timeout=5.0):
            raise RuntimeError("Configuration event loop did not start")
        self._loop = loop

    @staticmethod
    def _serve(loop: asyncio.AbstractEventLoop, ready: threading.Event) -> None:
        asyncio.set_event_loop(loop)
        loop.call_soon(ready.set)
        try:
            loop.run_forever()
            # Work still queued at close time is abandoned
            leftover = asyncio.all_tasks(loop)
            for task in leftover:
                task.cancel()
            loop.run_until_complete(asyncio.gather(*leftover, return_exceptions=True))
        finally:
            loop.close()

    def close(self) -> None:
        """Stop the loop and wait for its thread; safe to call twice."""
        loop, thread = self._loop, self._thread
        self._loop = self._thread = None
        if loop is not None:
            loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout=5.0)

    def submit(self, coro: Coroutine[Any, Any, Any]) -> Future:
        if self._loop is None:
            coro.close()
            raise RuntimeError("AsyncBridge is not open")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def run_sync(self, coro: Coroutine[Any, Any, Any], timeout: float | None = None) -> Any:
        """Block until coro finishes on the loop; its exceptions are re-raised."""
        return self.submit(coro).result(timeout=timeout)
