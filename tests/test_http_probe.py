from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest

from optimotion.environment.base import ReachabilitySignal
from optimotion.environment.http import HttpReachabilityProbe


@dataclass
class _FakeResponse:
    status: int

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class FakeHttpSession:
    """Returns scripted statuses (or raises scripted errors) for HEAD requests."""

    outcomes: list[int | BaseException]
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    closed: bool = False

    def head(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return _FakeResponse(outcome)

    async def close(self) -> None:
        self.closed = True


def _probe(session: FakeHttpSession, **kwargs: Any) -> HttpReachabilityProbe:
    return HttpReachabilityProbe(
        "https://fleet.example.com/health",
        session=session,  # type: ignore[arg-type]
        interval=60.0,
        **kwargs,
    )


@pytest.mark.asyncio
async def test_probe_transitions_emit_signals() -> None:
    session = FakeHttpSession([200, 503, aiohttp.ClientConnectionError("refused"), TimeoutError(), 204])
    probe = _probe(session)
    events: list[str] = []
    probe.subscribe(ReachabilitySignal.ONLINE, lambda: events.append("online"))
    probe.subscribe(ReachabilitySignal.OFFLINE, lambda: events.append("offline"))

    results = [await probe.probe_once() for _ in range(5)]

    assert results == [True, False, False, False, True]
    assert events == ["offline", "online"]


@pytest.mark.asyncio
async def test_probe_sends_head_without_redirects() -> None:
    session = FakeHttpSession([301])
    probe = _probe(session, timeout=2.0)

    assert await probe.probe_once() is True

    url, kwargs = session.calls[0]
    assert url == "https://fleet.example.com/health"
    assert kwargs["allow_redirects"] is False
    assert kwargs["timeout"].total == 2.0


@pytest.mark.asyncio
async def test_start_probes_immediately_and_stop_cancels() -> None:
    session = FakeHttpSession([500])
    async with _probe(session) as probe:
        await probe.start()
        assert probe.is_running
        assert not probe.is_online()
        await probe.start()
        assert len(session.calls) == 1

    assert not probe.is_running
    assert session.closed is False


@pytest.mark.asyncio
async def test_probe_requires_session() -> None:
    probe = HttpReachabilityProbe("https://fleet.example.com/health")
    with pytest.raises(RuntimeError):
        await probe.probe_once()


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        HttpReachabilityProbe("https://fleet.example.com/health", interval=0)
