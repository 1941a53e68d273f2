"""Realtime event bridge.

Owns:
- starting/stopping the realtime runtime
- the named-event listeners that forward payloads to the metric store
- the observable connection state
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from pygameday._constants import EVENT_ATTENDANCE, EVENT_CONCESSIONS, EVENT_PARKING
from pygameday._realtime import ConnectionState, RealtimeEvent, RealtimeRuntime
from pygameday.config import GameDayConfig
from pygameday.exceptions import GameDayPayloadError
from pygameday.ingestion.realtime import parse_attendance, parse_concessions, parse_parking
from pygameday.state.store import MetricStore

_logger = logging.getLogger(__name__)

StateListener = Callable[[ConnectionState], None]


class Runtime(Protocol):
    @property
    def is_running(self) -> bool: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


class RuntimeFactory(Protocol):
    def __call__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        config: GameDayConfig,
        events: Iterable[str],
        on_event: Callable[[RealtimeEvent], None],
        on_state: Callable[[ConnectionState], None],
        logger: logging.Logger | None = None,
    ) -> Runtime: ...


class RealtimeBridge:
    """Forward realtime events into a :class:`MetricStore`.

    Usage::

        bridge = RealtimeBridge(store, config)
        await bridge.activate()
        ...
        await bridge.deactivate()

    Listeners exist only between ``activate()`` and ``deactivate()``; an
    event delivered outside that window is dropped.
    """

    def __init__(
        self,
        store: MetricStore,
        config: GameDayConfig,
        *,
        runtime_factory: RuntimeFactory | None = None,
    ) -> None:
        self._store = store
        self._config = config
        self._runtime_factory: RuntimeFactory = runtime_factory or RealtimeRuntime
        self._runtime: Runtime | None = None
        self._handlers: dict[str, Callable[[Any], None]] = {}
        self._state = ConnectionState.DISCONNECTED
        self._state_listeners: list[StateListener] = []

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._runtime is not None

    @property
    def registered_events(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def add_state_listener(self, listener: StateListener) -> Callable[[], None]:
        """Observe connection state changes. Returns an unsubscribe callable."""
        self._state_listeners.append(listener)

        def _remove() -> None:
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

        return _remove

    async def activate(self) -> None:
        """Open the connection and register the event listeners.

        A no-op while the current runtime is still running. A runtime that
        has given up (state ``FAILED``) is torn down and replaced.
        """
        if self._runtime is not None:
            if self._runtime.is_running:
                return
            _logger.info("Realtime runtime is no longer running; restarting")
            await self.deactivate()
        loop = asyncio.get_running_loop()
        self._handlers = {
            EVENT_ATTENDANCE: self._apply_attendance,
            EVENT_CONCESSIONS: self._apply_concessions,
            EVENT_PARKING: self._apply_parking,
        }
        runtime = self._runtime_factory(
            loop=loop,
            config=self._config,
            events=tuple(self._handlers),
            on_event=self._on_event,
            on_state=self._on_runtime_state,
            logger=_logger,
        )
        self._runtime = runtime
        try:
            await loop.run_in_executor(None, runtime.start)
        except Exception:
            _logger.warning("Realtime runtime start failed", exc_info=True)
            self._runtime = None
            self._handlers = {}
            self._set_state(ConnectionState.FAILED)
            raise

    async def deactivate(self) -> None:
        """Unregister every listener and close the connection."""
        # Handlers go first so events already queued on the loop are dropped.
        self._handlers = {}
        runtime = self._runtime
        self._runtime = None
        if runtime is None:
            return
        try:
            await asyncio.get_running_loop().run_in_executor(None, runtime.stop)
        except Exception:
            _logger.warning("Realtime runtime stop failed", exc_info=True)
        self._set_state(ConnectionState.DISCONNECTED)

    def _on_runtime_state(self, state: ConnectionState) -> None:
        if self._runtime is None:
            return
        self._set_state(state)

    def _set_state(self, state: ConnectionState) -> None:
        if state == self._state:
            return
        _logger.debug("Realtime connection state %s -> %s", self._state, state)
        self._state = state
        for listener in list(self._state_listeners):
            try:
                listener(state)
            except Exception:
                _logger.warning("Connection state listener %r failed", listener, exc_info=True)

    def _on_event(self, event: RealtimeEvent) -> None:
        handler = self._handlers.get(event.event)
        if handler is None:
            _logger.debug("No listener for event=%s; dropped", event.event)
            return
        try:
            handler(event.payload)
        except GameDayPayloadError as exc:
            _logger.warning("Dropping malformed %s payload: %s", exc.event or event.event, exc)

    def _apply_attendance(self, payload: Any) -> None:
        self._store.set_attendance(parse_attendance(payload))

    def _apply_concessions(self, payload: Any) -> None:
        update = parse_concessions(payload)
        self._store.update_concessions(update.sales, update.inventory)

    def _apply_parking(self, payload: Any) -> None:
        update = parse_parking(payload)
        self._store.update_parking(update.available, update.occupied)
