"""Tests for the signal primitive, manual sources and the asyncio scheduler."""

from __future__ import annotations

import asyncio

import pytest

from optimotion.environment.base import ReachabilitySignal, Signal
from optimotion.environment.manual import ManualReachability, ManualScheduler
from optimotion.environment.scheduler import AsyncioScheduler

# ------------------------------------------------------------------
# Signal
# ------------------------------------------------------------------


def test_unsubscribe_removes_exactly_one_equal_callback() -> None:
    calls: list[str] = []

    def _callback() -> None:
        calls.append("x")

    signal: Signal[None] = Signal("online")
    first = signal.subscribe(_callback)
    signal.subscribe(_callback)

    assert signal.unsubscribe(first) is True
    signal.emit()

    assert len(signal) == 1
    assert calls == ["x"]


def test_unsubscribe_unknown_handle_returns_false() -> None:
    signal: Signal[None] = Signal("a")
    handle = Signal("b").subscribe(lambda: None)
    assert signal.unsubscribe(handle) is False


def test_equivalent_closures_are_distinct_registrations() -> None:
    state = {"online": True}
    signal: Signal[None] = Signal("online")
    handle = signal.subscribe(lambda: state.update(online=True))
    signal.subscribe(lambda: state.update(online=True))

    signal.unsubscribe(handle)
    assert len(signal) == 1


def test_unsubscribe_during_emit_is_safe() -> None:
    calls: list[int] = []
    signal: Signal[int] = Signal("n")
    handles = []

    def _first(value: int) -> None:
        calls.append(value)
        signal.unsubscribe(handles[1])

    handles.append(signal.subscribe(_first))
    handles.append(signal.subscribe(lambda value: calls.append(value * 10)))

    signal.emit(1)
    signal.emit(2)

    assert calls == [1, 10, 2]


# ------------------------------------------------------------------
# ManualReachability
# ------------------------------------------------------------------


def test_manual_reachability_emits_on_transitions_only() -> None:
    source = ManualReachability(online=True)
    events: list[str] = []
    source.subscribe(ReachabilitySignal.ONLINE, lambda: events.append("online"))
    source.subscribe(ReachabilitySignal.OFFLINE, lambda: events.append("offline"))

    source.set_online(True)
    source.set_online(False)
    source.set_online(False)
    source.set_online(True)

    assert events == ["offline", "online"]
    assert source.is_online()


# ------------------------------------------------------------------
# ManualScheduler
# ------------------------------------------------------------------


def test_manual_scheduler_fires_once_per_interval() -> None:
    scheduler = ManualScheduler()
    fired: list[float] = []
    scheduler.schedule_recurring(5.0, lambda: fired.append(scheduler.now))

    assert scheduler.advance(12.0) == 2
    assert fired == [5.0, 10.0]
    assert scheduler.now == 12.0


def test_manual_scheduler_orders_multiple_timers() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.schedule_recurring(3.0, lambda: fired.append("a"))
    scheduler.schedule_recurring(2.0, lambda: fired.append("b"))

    scheduler.advance(6.0)

    assert fired == ["b", "a", "b", "a", "b"]


def test_manual_scheduler_cancel() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    handle = scheduler.schedule_recurring(1.0, lambda: fired.append(1))
    scheduler.advance(1.0)
    scheduler.cancel(handle)
    scheduler.cancel(handle)
    scheduler.advance(10.0)
    assert fired == [1]
    assert scheduler.active_count == 0


def test_manual_scheduler_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        ManualScheduler().schedule_recurring(0, lambda: None)


# ------------------------------------------------------------------
# AsyncioScheduler
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_asyncio_scheduler_fires_and_cancels() -> None:
    scheduler = AsyncioScheduler()
    fired = asyncio.Event()
    count = 0

    def _tick() -> None:
        nonlocal count
        count += 1
        if count >= 2:
            fired.set()

    handle = scheduler.schedule_recurring(0.01, _tick)
    await asyncio.wait_for(fired.wait(), timeout=2.0)
    scheduler.cancel(handle)
    seen = count

    await asyncio.sleep(0.05)

    assert seen >= 2
    assert count == seen
    assert scheduler.active_count == 0


@pytest.mark.asyncio
async def test_asyncio_scheduler_callback_may_cancel_itself() -> None:
    scheduler = AsyncioScheduler()
    calls: list[int] = []
    handles = []

    def _once() -> None:
        calls.append(1)
        scheduler.cancel(handles[0])

    handles.append(scheduler.schedule_recurring(0.01, _once))
    await asyncio.sleep(0.08)

    assert calls == [1]
    assert scheduler.active_count == 0


@pytest.mark.asyncio
async def test_asyncio_scheduler_cancel_all() -> None:
    scheduler = AsyncioScheduler()
    scheduler.schedule_recurring(10.0, lambda: None)
    scheduler.schedule_recurring(10.0, lambda: None)
    scheduler.cancel_all()
    assert scheduler.active_count == 0


def test_asyncio_scheduler_requires_running_loop() -> None:
    with pytest.raises(RuntimeError):
        AsyncioScheduler().schedule_recurring(1.0, lambda: None)


def test_asyncio_scheduler_rejects_non_positive_interval() -> None:
    with pytest.raises(ValueError):
        AsyncioScheduler().schedule_recurring(-1.0, lambda: None)
