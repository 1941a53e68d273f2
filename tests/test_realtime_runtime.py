from __future__ import annotations

import asyncio
import json

import pytest

from pygameday._constants import EVENT_ATTENDANCE, EVENT_PARKING, REALTIME_EVENTS
from pygameday._realtime import ConnectionState, RealtimeEvent, RealtimeRuntime, decode_payload
from pygameday.config import GameDayConfig, ReconnectPolicy


def _runtime(
    loop: asyncio.AbstractEventLoop,
    events: list[RealtimeEvent],
    states: list[ConnectionState],
    *,
    max_attempts: int = 2,
) -> RealtimeRuntime:
    config = GameDayConfig(
        topic_prefix="stadium",
        reconnect=ReconnectPolicy(initial_delay=1.0, max_delay=4.0, max_attempts=max_attempts),
    )
    return RealtimeRuntime(
        loop=loop,
        config=config,
        events=REALTIME_EVENTS,
        on_event=events.append,
        on_state=states.append,
    )


def test_decode_payload() -> None:
    assert decode_payload(b'{"available": 1, "occupied": 2}') == {"available": 1, "occupied": 2}
    assert decode_payload(b"55390") == 55390


@pytest.mark.asyncio
async def test_topics_follow_prefix() -> None:
    runtime = _runtime(asyncio.get_running_loop(), [], [])

    assert set(runtime.topics) == {
        "stadium/attendance-update",
        "stadium/concessions-update",
        "stadium/parking-update",
    }


@pytest.mark.asyncio
async def test_messages_delivered_in_order() -> None:
    events: list[RealtimeEvent] = []
    runtime = _runtime(asyncio.get_running_loop(), events, [])

    runtime.handle_message("stadium/attendance-update", b"100")
    runtime.handle_message("stadium/parking-update", json.dumps({"available": 1, "occupied": 2}).encode())
    runtime.handle_message("stadium/attendance-update", b"200")
    await asyncio.sleep(0)

    assert [(e.event, e.payload) for e in events] == [
        (EVENT_ATTENDANCE, 100),
        (EVENT_PARKING, {"available": 1, "occupied": 2}),
        (EVENT_ATTENDANCE, 200),
    ]


@pytest.mark.asyncio
async def test_undecodable_and_foreign_messages_dropped() -> None:
    events: list[RealtimeEvent] = []
    runtime = _runtime(asyncio.get_running_loop(), events, [])

    runtime.handle_message("stadium/attendance-update", b"{not json")
    runtime.handle_message("stadium/attendance-update", b"\xff\xfe")
    runtime.handle_message("elsewhere/attendance-update", b"1")
    await asyncio.sleep(0)

    assert events == []


@pytest.mark.asyncio
async def test_reconnect_budget_then_failed() -> None:
    states: list[ConnectionState] = []
    runtime = _runtime(asyncio.get_running_loop(), [], states, max_attempts=2)
    runtime._running = True  # type: ignore[attr-defined]

    runtime.handle_connected()
    assert runtime.handle_connection_lost() is True
    assert runtime.handle_connection_lost() is True
    assert runtime.handle_connection_lost() is False
    await asyncio.sleep(0)

    assert states == [
        ConnectionState.CONNECTED,
        ConnectionState.DISCONNECTED,
        ConnectionState.CONNECTING,
        ConnectionState.DISCONNECTED,
        ConnectionState.CONNECTING,
        ConnectionState.DISCONNECTED,
        ConnectionState.FAILED,
    ]
    assert not runtime.is_running


@pytest.mark.asyncio
async def test_successful_connect_resets_attempts() -> None:
    states: list[ConnectionState] = []
    runtime = _runtime(asyncio.get_running_loop(), [], states, max_attempts=1)

    assert runtime.handle_connection_lost() is True
    runtime.handle_connected()
    assert runtime.handle_connection_lost() is True
    await asyncio.sleep(0)

    assert ConnectionState.FAILED not in states


@pytest.mark.asyncio
async def test_zero_attempts_fails_on_first_drop() -> None:
    states: list[ConnectionState] = []
    runtime = _runtime(asyncio.get_running_loop(), [], states, max_attempts=0)

    assert runtime.handle_connection_lost() is False
    await asyncio.sleep(0)

    assert states[-1] == ConnectionState.FAILED


def test_stop_without_start_is_noop() -> None:
    loop = asyncio.new_event_loop()
    try:
        runtime = _runtime(loop, [], [])
        runtime.stop()
        assert not runtime.is_running
    finally:
        loop.close()
