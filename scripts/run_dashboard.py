#!/usr/bin/env python3
"""Headless dashboard runner.

Mounts the dashboard on a real event loop and prints the view every time
state changes. Useful for watching the live refresh and connectivity
handling without a renderer attached.

Reachability comes from one of:
- ``--probe-url``: periodic HTTP HEAD probe (aiohttp)
- ``--mqtt-host``: telemetry broker connection state (paho-mqtt)
- neither: always online, with ``--flap`` toggling it every few ticks
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from optimotion import ChangeKind, Dashboard, DashboardConfig, StateChange  # noqa: E402
from optimotion.environment import (  # noqa: E402
    AsyncioScheduler,
    ManualInstallHost,
    ManualReachability,
    ReachabilitySource,
)
from optimotion.environment.http import HttpReachabilityProbe  # noqa: E402
from optimotion.environment.mqtt import MqttBrokerSettings, MqttReachability  # noqa: E402

_LOG = logging.getLogger("run_dashboard")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the fleet dashboard core headless and print its view.")
    parser.add_argument("--duration", type=float, default=30.0, help="Seconds to run (default: 30)")
    parser.add_argument("--interval", type=float, default=None, help="Refresh interval override in seconds")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the simulated feed")
    parser.add_argument("--search", default="", help="Fleet list search query")
    parser.add_argument("--probe-url", default=None, help="URL to probe for reachability")
    parser.add_argument("--mqtt-host", default=None, help="MQTT broker host whose connection defines reachability")
    parser.add_argument("--mqtt-port", type=int, default=8883)
    parser.add_argument("--flap", action="store_true", help="Toggle manual reachability every 3 ticks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _render(dashboard: Dashboard, change: StateChange) -> None:
    view = dashboard.view()
    cards = "  ".join(f"{card.title}: {card.value}" for card in view.metric_cards)
    print(f"[{change.observed_at:%H:%M:%S}] {change.kind.value:<13} {view.page_title} | {cards}")
    if view.offline_notice:
        print(f"  ! {view.offline_notice}")
    for sample in view.analytics:
        print(f"  {sample.date}  revenue={sample.revenue:>10,.0f}  efficiency={sample.efficiency:6.2f}")


async def run(args: argparse.Namespace) -> None:
    overrides: dict[str, object] = {}
    if args.interval is not None:
        overrides["refresh_interval"] = args.interval
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    config = DashboardConfig.from_env(**overrides)

    loop = asyncio.get_running_loop()
    async with contextlib.AsyncExitStack() as stack:
        manual = ManualReachability()
        reachability: ReachabilitySource = manual
        if args.probe_url:
            probe = await stack.enter_async_context(HttpReachabilityProbe(args.probe_url))
            await probe.start()
            reachability = probe
        elif args.mqtt_host:
            mqtt_reach = MqttReachability(MqttBrokerSettings(host=args.mqtt_host, port=args.mqtt_port), loop=loop)
            mqtt_reach.start()
            stack.callback(mqtt_reach.stop)
            reachability = mqtt_reach

        dashboard = Dashboard(
            reachability=reachability,
            install_host=ManualInstallHost(),
            scheduler=AsyncioScheduler(loop),
            config=config,
        )
        dashboard.add_listener(lambda change: _render(dashboard, change))
        dashboard = await stack.enter_async_context(dashboard)
        dashboard.set_search_query(args.search)

        if args.flap:

            def _flap(change: StateChange) -> None:
                if change.kind == ChangeKind.TICK and dashboard.refresh_ticks % 3 == 0:
                    manual.set_online(not manual.is_online())

            dashboard.add_listener(_flap)

        _LOG.info("Dashboard running for %.1fs (interval %.1fs)", args.duration, config.refresh_interval)
        await asyncio.sleep(args.duration)


def main() -> None:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run(args))


if __name__ == "__main__":
    main()
