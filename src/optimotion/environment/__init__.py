"""Host environment interfaces and adapters.

The dashboard never touches global environment state. Reachability,
install offers and timers are injected through the protocols in
:mod:`optimotion.environment.base`.
"""

from optimotion.environment.base import (
    InstallOffer,
    InstallOfferSource,
    ReachabilitySignal,
    ReachabilitySource,
    Scheduler,
    Signal,
    SubscriptionHandle,
    TimerHandle,
)
from optimotion.environment.manual import (
    DeferredInstallPrompt,
    InstallOutcome,
    ManualInstallHost,
    ManualReachability,
    ManualScheduler,
)
from optimotion.environment.scheduler import AsyncioScheduler

__all__ = [
    "AsyncioScheduler",
    "DeferredInstallPrompt",
    "InstallOffer",
    "InstallOfferSource",
    "InstallOutcome",
    "ManualInstallHost",
    "ManualReachability",
    "ManualScheduler",
    "ReachabilitySignal",
    "ReachabilitySource",
    "Scheduler",
    "Signal",
    "SubscriptionHandle",
    "TimerHandle",
]
