from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import pytest

from pygameday._realtime import ConnectionState, RealtimeEvent
from pygameday.config import GameDayConfig


class FakeTransport:
    """In-memory `Transport` returning canned responses per endpoint.

    A response may be a dict, an exception instance (raised), or an
    async callable returning a dict.
    """

    def __init__(self, responses: Mapping[str, Any] | None = None) -> None:
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        self.calls.append((endpoint, dict(params or {})))
        value = self.responses[endpoint]
        if isinstance(value, BaseException):
            raise value
        if callable(value):
            return await value()
        return value


class DummyRuntime:
    """Stand-in for `RealtimeRuntime` that never touches the network."""

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        config: GameDayConfig,
        events: Iterable[str],
        on_event: Callable[[RealtimeEvent], None],
        on_state: Callable[[ConnectionState], None],
        logger: Any = None,
    ) -> None:
        self.loop = loop
        self.config = config
        self.events = tuple(events)
        self.on_event = on_event
        self.on_state = on_state
        self.started = False
        self.stopped = False
        self.gave_up = False

    @property
    def is_running(self) -> bool:
        return self.started and not self.stopped and not self.gave_up

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def emit(self, event: str, payload: Any) -> None:
        self.on_event(RealtimeEvent(event=event, topic=self.config.topic_for(event), payload=payload))

    def give_up(self) -> None:
        """Behave like a runtime whose reconnect budget ran out."""
        self.gave_up = True
        self.on_state(ConnectionState.FAILED)


class RuntimeRecorder:
    """Runtime factory that remembers every runtime it built."""

    def __init__(self) -> None:
        self.runtimes: list[DummyRuntime] = []

    def __call__(self, **kwargs: Any) -> DummyRuntime:
        runtime = DummyRuntime(**kwargs)
        self.runtimes.append(runtime)
        return runtime

    @property
    def last(self) -> DummyRuntime:
        return self.runtimes[-1]


@pytest.fixture
def recorder() -> RuntimeRecorder:
    return RuntimeRecorder()


@pytest.fixture
def config() -> GameDayConfig:
    return GameDayConfig(base_url="http://stadium.test", topic_prefix="stadium")
