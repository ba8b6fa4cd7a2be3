"""Reachability from periodic HTTP probes."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from optimotion.environment.base import ReachabilitySignal, Signal, SubscriptionHandle

_logger = logging.getLogger(__name__)


class HttpReachabilityProbe:
    """Reachability source that probes a URL with ``HEAD`` requests.

    Any response below 400 counts as online; connection errors, timeouts
    and 4xx/5xx responses count as offline. Signals fire on transitions
    only.

    Usage::

        async with HttpReachabilityProbe("https://example.com/health") as probe:
            await probe.start()
            async with Dashboard(reachability=probe, ...) as dashboard:
                ...
    """

    def __init__(
        self,
        url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        interval: float = 15.0,
        timeout: float = 5.0,
        initial_online: bool = True,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._url = url
        self._external_session = session is not None
        self._http_session = session
        self._interval = interval
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._online = initial_online
        self._task: asyncio.Task[None] | None = None
        self._signals: dict[ReachabilitySignal, Signal[None]] = {
            signal: Signal(signal.value) for signal in ReachabilitySignal
        }

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> HttpReachabilityProbe:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # ReachabilitySource
    # ------------------------------------------------------------------

    def is_online(self) -> bool:
        return self._online

    def subscribe(self, signal: ReachabilitySignal, callback: Callable[[], None]) -> SubscriptionHandle:
        return self._signals[ReachabilitySignal(signal)].subscribe(callback)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        self._signals[ReachabilitySignal(handle.topic)].unsubscribe(handle)

    # ------------------------------------------------------------------
    # Probing
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def probe_once(self) -> bool:
        """Probe the URL once, update state, and return reachability."""
        session = self._http_session
        if session is None:
            raise RuntimeError("Probe not initialized. Use 'async with HttpReachabilityProbe(...) as probe:'")
        try:
            async with session.head(self._url, timeout=self._timeout, allow_redirects=False) as response:
                online = response.status < 400
                if not online:
                    _logger.debug("Reachability probe %s returned HTTP %s", self._url, response.status)
        except (aiohttp.ClientError, TimeoutError) as exc:
            _logger.debug("Reachability probe %s failed: %s", self._url, exc)
            online = False
        self._set_online(online)
        return online

    async def start(self) -> None:
        """Probe once, then keep probing in the background."""
        if self.is_running:
            return
        await self.probe_once()
        self._task = asyncio.create_task(self._run(), name=f"reachability-probe:{self._url}")

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.probe_once()
            except Exception:
                _logger.warning("Reachability probe loop error", exc_info=True)

    def _set_online(self, online: bool) -> None:
        if online == self._online:
            return
        self._online = online
        _logger.debug("Reachability changed online=%s url=%s", online, self._url)
        self._signals[ReachabilitySignal.ONLINE if online else ReachabilitySignal.OFFLINE].emit()
