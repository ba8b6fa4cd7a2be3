"""Simulated live telemetry feed.

A recurring tick nudges every analytics sample so the dashboard visibly
updates. A real data source can replace :meth:`LiveRefreshEngine.tick` by
writing through :meth:`StateStore.replace_analytics` the same way.
"""

from __future__ import annotations

import functools
import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum

from optimotion.config import DashboardConfig
from optimotion.environment.base import Scheduler, TimerHandle
from optimotion.exceptions import DashboardStateError
from optimotion.models.analytics import AnalyticsSample
from optimotion.store import StateStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RefreshPhase(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class LiveRefreshEngine:
    """Owns the single recurring tick of a mounted dashboard."""

    def __init__(
        self,
        scheduler: Scheduler,
        store: StateStore,
        *,
        config: DashboardConfig | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._scheduler = scheduler
        self._store = store
        self._config = config or DashboardConfig()
        self._rng = rng or random.Random(self._config.random_seed)
        self._clock = clock
        self._phase = RefreshPhase.IDLE
        self._handle: TimerHandle | None = None
        # Bumped on every start/stop; callbacks from an older run are ignored.
        self._generation = 0
        self.ticks = 0
        self.last_tick_at: datetime | None = None

    @property
    def phase(self) -> RefreshPhase:
        return self._phase

    def start(self) -> None:
        if self._phase == RefreshPhase.RUNNING:
            raise DashboardStateError("Live refresh is already running")
        self._generation += 1
        callback = functools.partial(self._on_timer, self._generation)
        self._handle = self._scheduler.schedule_recurring(self._config.refresh_interval, callback)
        self._phase = RefreshPhase.RUNNING
        _logger.debug("Live refresh started interval=%.3fs", self._config.refresh_interval)

    def stop(self) -> None:
        handle = self._handle
        self._handle = None
        self._generation += 1
        if self._phase == RefreshPhase.IDLE:
            return
        self._phase = RefreshPhase.IDLE
        if handle is not None:
            self._scheduler.cancel(handle)
        _logger.debug("Live refresh stopped after %d ticks", self.ticks)

    def _on_timer(self, generation: int) -> None:
        if generation != self._generation or self._phase != RefreshPhase.RUNNING:
            _logger.debug("Ignoring stale refresh tick")
            return
        self.tick()

    def tick(self) -> None:
        """Apply one round of simulated telemetry to every sample."""
        samples = [self._perturb(sample) for sample in self._store.state.analytics]
        self.ticks += 1
        self.last_tick_at = self._clock()
        self._store.replace_analytics(samples)
        _logger.debug("Live refresh tick=%d samples=%d", self.ticks, len(samples))

    def _perturb(self, sample: AnalyticsSample) -> AnalyticsSample:
        config = self._config
        efficiency = sample.efficiency + self._rng.uniform(-config.efficiency_jitter, config.efficiency_jitter)
        if config.clamp_efficiency:
            efficiency = min(max(efficiency, config.efficiency_min), config.efficiency_max)
        increment = self._rng.randrange(config.revenue_increment_max) if config.revenue_increment_max > 0 else 0
        return sample.model_copy(update={"efficiency": efficiency, "revenue": sample.revenue + increment})
