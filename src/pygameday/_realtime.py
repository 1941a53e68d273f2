"""Internal realtime transport: paho-mqtt runtime and connection state."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, cast

import paho.mqtt.client as mqtt

from pygameday._redact import redact_for_log
from pygameday.config import GameDayConfig


class ConnectionState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


@dataclass(frozen=True)
class RealtimeEvent:
    """A decoded event delivered by the event source."""

    event: str
    topic: str
    payload: Any


def decode_payload(payload: bytes) -> Any:
    """Decode a UTF-8 JSON message body."""
    return json.loads(payload.decode("utf-8"))


class RealtimeRuntime:
    """Threaded paho-mqtt runtime that emits decoded events onto an asyncio loop.

    paho runs its network loop on a background thread.  Every callback that
    leaves this class is scheduled with ``loop.call_soon_threadsafe``, so
    events reach the consumer on the event loop in the order the broker
    delivered them.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        config: GameDayConfig,
        events: Iterable[str],
        on_event: Callable[[RealtimeEvent], None],
        on_state: Callable[[ConnectionState], None],
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._config = config
        self._policy = config.reconnect
        self._topics: dict[str, str] = {config.topic_for(name): name for name in events}
        self._on_event = on_event
        self._on_state = on_state
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._attempt = 0

    @property
    def is_running(self) -> bool:
        """Whether the network loop is active and has not given up."""
        return self._running

    @property
    def topics(self) -> tuple[str, ...]:
        return tuple(self._topics)

    def _emit_state(self, state: ConnectionState) -> None:
        self._loop.call_soon_threadsafe(self._on_state, state)

    def handle_connected(self) -> None:
        self._attempt = 0
        self._emit_state(ConnectionState.CONNECTED)

    def handle_connection_lost(self) -> bool:
        """Record a dropped connection or a failed attempt.

        Returns ``True`` when paho should keep retrying, ``False`` once the
        retry budget is spent.
        """
        self._attempt += 1
        self._emit_state(ConnectionState.DISCONNECTED)
        if self._policy.exhausted(self._attempt):
            self._logger.warning(
                "Realtime connection failed after %d attempt(s); giving up",
                self._policy.max_attempts,
            )
            self._running = False
            self._emit_state(ConnectionState.FAILED)
            return False
        self._logger.info(
            "Realtime connection lost; reconnect attempt %d/%d in %.1fs",
            self._attempt,
            self._policy.max_attempts,
            self._policy.delay_for(self._attempt),
        )
        self._emit_state(ConnectionState.CONNECTING)
        return True

    def handle_message(self, topic: str, raw: bytes) -> None:
        name = self._topics.get(topic)
        if name is None:
            self._logger.debug("Ignoring message on unexpected topic=%s", topic)
            return
        try:
            payload = decode_payload(raw)
        except (UnicodeDecodeError, json.JSONDecodeError):
            self._logger.warning("Dropping undecodable %s payload on topic=%s", name, topic, exc_info=True)
            return
        self._logger.debug("Received event=%s payload=%s", name, redact_for_log(payload, max_string=128))
        self._loop.call_soon_threadsafe(self._on_event, RealtimeEvent(event=name, topic=topic, payload=payload))

    def start(self) -> None:
        """Connect asynchronously and subscribe to every event topic."""
        self.stop()
        self._logger.debug(
            "Realtime runtime start requested host=%s port=%s topics=%s",
            self._config.broker_host,
            self._config.broker_port,
            list(self._topics),
        )

        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=self._config.client_id,
            protocol=mqtt.MQTTv311,
        )
        client.enable_logger(self._logger)
        if self._config.mqtt_tls:
            client.tls_set()
        client.reconnect_delay_set(
            min_delay=self._policy.initial_delay,
            max_delay=self._policy.max_delay,
        )

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.value != 0:
                self._logger.warning("Realtime connect refused: %s", reason_code)
                return
            self._logger.debug("Realtime connected reason=%s", reason_code)
            for topic in self._topics:
                c.subscribe(topic, qos=1)
            self.handle_connected()

        def on_connect_fail(c: mqtt.Client, _userdata: Any) -> None:
            if self._running and not self.handle_connection_lost():
                c.disconnect()

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            self.handle_message(msg.topic, msg.payload)

        def on_disconnect(
            c: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if not self._running:
                return
            self._logger.debug("Realtime disconnected: %s", reason_code)
            if not self.handle_connection_lost():
                c.disconnect()

        client.on_connect = on_connect
        client.on_connect_fail = on_connect_fail
        client.on_message = on_message
        client.on_disconnect = on_disconnect

        self._attempt = 0
        self._running = True
        self._client = client
        self._emit_state(ConnectionState.CONNECTING)
        client.connect_async(self._config.broker_host, self._config.broker_port, keepalive=self._config.mqtt_keepalive)
        client.loop_start()
        self._logger.debug("Realtime network loop started")

    def stop(self) -> None:
        """Disconnect and stop the network loop if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("Realtime disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("Realtime network loop stopped")
