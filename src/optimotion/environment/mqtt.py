"""Broker reachability from a paho-mqtt connection.

The dashboard treats "connected to the telemetry broker" as being online.
paho runs its network loop on a background thread; every state change is
marshalled onto the asyncio loop with ``call_soon_threadsafe`` so the
dashboard only ever sees signals on its own thread.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import paho.mqtt.client as mqtt

from optimotion.environment.base import ReachabilitySignal, Signal, SubscriptionHandle


@dataclass(frozen=True)
class MqttBrokerSettings:
    """Connection details for the broker whose reachability is tracked."""

    host: str
    port: int = 8883
    client_id: str = ""
    username: str | None = None
    password: str | None = None
    tls: bool = True
    keepalive: int = 60


def _default_client_factory(settings: MqttBrokerSettings) -> mqtt.Client:
    return mqtt.Client(
        callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
        client_id=settings.client_id,
        protocol=mqtt.MQTTv5,
    )


class MqttReachability:
    """Reachability source backed by a paho-mqtt client.

    Starts offline; the first successful CONNACK flips it online. paho's
    automatic reconnect produces the later online/offline transitions.
    """

    def __init__(
        self,
        settings: MqttBrokerSettings,
        *,
        loop: asyncio.AbstractEventLoop,
        client_factory: Callable[[MqttBrokerSettings], mqtt.Client] = _default_client_factory,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._loop = loop
        self._client_factory = client_factory
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._online = False
        # Bumped on every start/stop; events marshalled from an older
        # connection are dropped.
        self._generation = 0
        self._signals: dict[ReachabilitySignal, Signal[None]] = {
            signal: Signal(signal.value) for signal in ReachabilitySignal
        }

    @property
    def is_running(self) -> bool:
        """Whether the MQTT network loop is active."""
        return self._running

    def is_online(self) -> bool:
        return self._online

    def subscribe(self, signal: ReachabilitySignal, callback: Callable[[], None]) -> SubscriptionHandle:
        return self._signals[ReachabilitySignal(signal)].subscribe(callback)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        self._signals[ReachabilitySignal(handle.topic)].unsubscribe(handle)

    def start(self) -> None:
        """Connect asynchronously and start paho's network thread."""
        self.stop()
        settings = self._settings
        self._logger.debug(
            "MQTT reachability start host=%s port=%s client_id=%s",
            settings.host,
            settings.port,
            settings.client_id,
        )

        self._generation += 1
        generation = self._generation

        client = self._client_factory(settings)
        client.enable_logger(self._logger)
        if settings.username is not None:
            client.username_pw_set(settings.username, settings.password)
        if settings.tls:
            client.tls_set()

        def on_connect(
            _client: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if not self._running:
                return
            if reason_code.value != 0:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                self._loop.call_soon_threadsafe(self._apply, generation, False)
                return
            self._logger.debug("MQTT connected reason=%s", reason_code)
            self._loop.call_soon_threadsafe(self._apply, generation, True)

        def on_disconnect(
            _client: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if not self._running:
                return
            self._logger.debug("MQTT disconnected: %s", reason_code)
            self._loop.call_soon_threadsafe(self._apply, generation, False)

        client.on_connect = on_connect
        client.on_disconnect = on_disconnect

        self._client = client
        self._running = True
        client.connect_async(settings.host, settings.port, keepalive=settings.keepalive)
        client.loop_start()
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Disconnect and stop the network thread if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False
        self._generation += 1

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("MQTT disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")
            self._set_online(False)

    def _apply(self, generation: int, online: bool) -> None:
        if generation != self._generation or not self._running:
            self._logger.debug("Dropping stale MQTT connection event online=%s", online)
            return
        self._set_online(online)

    def _set_online(self, online: bool) -> None:
        if online == self._online:
            return
        self._online = online
        self._signals[ReachabilitySignal.ONLINE if online else ReachabilitySignal.OFFLINE].emit()
