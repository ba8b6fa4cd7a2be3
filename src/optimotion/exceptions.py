"""Custom exception hierarchy for optimotion."""

from __future__ import annotations


class OptimotionError(Exception):
    """Base exception for all optimotion errors."""


class OptimotionConfigError(OptimotionError):
    """Invalid or missing configuration."""


class MetricUnavailableError(OptimotionError):
    """A derived metric cannot be computed from the current state.

    Recoverable: callers are expected to show a placeholder instead.
    """


class EmptyFleetError(MetricUnavailableError):
    """The vehicle collection is empty."""


class NoDataError(MetricUnavailableError):
    """The analytics sequence is empty."""


class InvalidTabError(OptimotionError, ValueError):
    """A tab outside the closed navigation set was requested."""

    def __init__(self, tab: object) -> None:
        self.tab = tab
        super().__init__(f"Unknown dashboard tab: {tab!r}")


class DashboardStateError(OptimotionError):
    """Lifecycle misuse (double mount, restarting a running engine)."""


class DashboardMountError(OptimotionError):
    """A subscription or timer registration failed while mounting.

    Fatal to initialization. Any registration acquired before the failure
    has already been released when this is raised; the original error is
    available as ``__cause__``.
    """
