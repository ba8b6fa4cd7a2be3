from __future__ import annotations

import pytest

from optimotion.config import DashboardConfig
from optimotion.exceptions import OptimotionConfigError

_ENV_KEYS = (
    "OPTIMOTION_REFRESH_INTERVAL",
    "OPTIMOTION_EFFICIENCY_JITTER",
    "OPTIMOTION_EFFICIENCY_MIN",
    "OPTIMOTION_EFFICIENCY_MAX",
    "OPTIMOTION_REVENUE_INCREMENT_MAX",
    "OPTIMOTION_RANDOM_SEED",
    "OPTIMOTION_CLAMP_EFFICIENCY",
    "OPTIMOTION_CURRENCY_SYMBOL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = DashboardConfig()
    assert config.refresh_interval == 5.0
    assert config.efficiency_jitter == 1.0
    assert config.revenue_increment_max == 1000
    assert config.clamp_efficiency is True
    assert (config.efficiency_min, config.efficiency_max) == (0.0, 100.0)
    assert config.metric_trends == (2.5, -1.2, 4.8)


def test_from_env_reads_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMOTION_REFRESH_INTERVAL", "2.5")
    monkeypatch.setenv("OPTIMOTION_REVENUE_INCREMENT_MAX", "50")
    monkeypatch.setenv("OPTIMOTION_RANDOM_SEED", "7")
    monkeypatch.setenv("OPTIMOTION_CLAMP_EFFICIENCY", "off")
    monkeypatch.setenv("OPTIMOTION_CURRENCY_SYMBOL", "$")

    config = DashboardConfig.from_env()

    assert config.refresh_interval == 2.5
    assert config.revenue_increment_max == 50
    assert config.random_seed == 7
    assert config.clamp_efficiency is False
    assert config.currency_symbol == "$"


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMOTION_REFRESH_INTERVAL", "2.5")
    monkeypatch.setenv("OPTIMOTION_CLAMP_EFFICIENCY", "no")

    config = DashboardConfig.from_env(refresh_interval=9.0, clamp_efficiency=True)

    assert config.refresh_interval == 9.0
    assert config.clamp_efficiency is True


def test_unrecognised_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMOTION_CLAMP_EFFICIENCY", "maybe")
    assert DashboardConfig.from_env().clamp_efficiency is True


def test_unparsable_number_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIMOTION_REFRESH_INTERVAL", "soon")
    with pytest.raises(OptimotionConfigError):
        DashboardConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"refresh_interval": 0},
        {"refresh_interval": -5},
        {"efficiency_jitter": -0.1},
        {"revenue_increment_max": -1},
        {"efficiency_min": 50.0, "efficiency_max": 10.0},
        {"metric_trends": (1.0, 2.0)},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(OptimotionConfigError):
        DashboardConfig(**kwargs)  # type: ignore[arg-type]
