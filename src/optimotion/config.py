"""Dashboard configuration for optimotion."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from optimotion.exceptions import OptimotionConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, raw: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise OptimotionConfigError(f"{env_key} must be a {cast.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class DashboardConfig:
    """Dashboard configuration.

    Parameters
    ----------
    refresh_interval : float
        Seconds between live-refresh ticks.
    efficiency_jitter : float
        Half-width of the uniform perturbation applied to each sample's
        efficiency on every tick.
    revenue_increment_max : int
        Exclusive upper bound of the integer revenue increment per tick.
        ``0`` freezes revenue.
    clamp_efficiency : bool
        Keep efficiency inside ``[efficiency_min, efficiency_max]``.
        Disable to allow unbounded drift.
    efficiency_min : float
        Lower clamp bound.
    efficiency_max : float
        Upper clamp bound.
    random_seed : int or None
        Seed for the simulation's random source. ``None`` seeds from
        the operating system.
    metric_trends : tuple of float
        Trend percentages shown on the three overview cards
        (active vehicles, battery health, revenue).
    currency_symbol : str
        Prefix used when formatting revenue for display.
    """

    refresh_interval: float = 5.0
    efficiency_jitter: float = 1.0
    revenue_increment_max: int = 1000
    clamp_efficiency: bool = True
    efficiency_min: float = 0.0
    efficiency_max: float = 100.0
    random_seed: int | None = None
    metric_trends: tuple[float, float, float] = (2.5, -1.2, 4.8)
    currency_symbol: str = "₹"

    def __post_init__(self) -> None:
        if self.refresh_interval <= 0:
            raise OptimotionConfigError("refresh_interval must be positive")
        if self.efficiency_jitter < 0:
            raise OptimotionConfigError("efficiency_jitter must not be negative")
        if self.revenue_increment_max < 0:
            raise OptimotionConfigError("revenue_increment_max must not be negative")
        if self.efficiency_min > self.efficiency_max:
            raise OptimotionConfigError("efficiency_min must not exceed efficiency_max")
        if len(self.metric_trends) != 3:
            raise OptimotionConfigError("metric_trends needs exactly three values")

    @classmethod
    def from_env(cls, **overrides: Any) -> DashboardConfig:
        """Create configuration from ``OPTIMOTION_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "OPTIMOTION_REFRESH_INTERVAL": "refresh_interval",
            "OPTIMOTION_EFFICIENCY_JITTER": "efficiency_jitter",
            "OPTIMOTION_EFFICIENCY_MIN": "efficiency_min",
            "OPTIMOTION_EFFICIENCY_MAX": "efficiency_max",
        }
        _ENV_INT_MAP = {
            "OPTIMOTION_REVENUE_INCREMENT_MAX": "revenue_increment_max",
            "OPTIMOTION_RANDOM_SEED": "random_seed",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, float)
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, int)

        if "clamp_efficiency" not in overrides:
            config_kwargs["clamp_efficiency"] = _env_bool(env.get("OPTIMOTION_CLAMP_EFFICIENCY"), True)

        symbol = env.get("OPTIMOTION_CURRENCY_SYMBOL")
        if symbol is not None and "currency_symbol" not in overrides:
            config_kwargs["currency_symbol"] = symbol

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
