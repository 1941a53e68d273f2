"""High-level async client for live game day metrics."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import aiohttp

from pygameday._api import forecast as _forecast_api
from pygameday._api import historical as _historical_api
from pygameday._realtime import ConnectionState
from pygameday._transport import HttpTransport, Transport
from pygameday.bridge import RealtimeBridge, RuntimeFactory
from pygameday.config import GameDayConfig
from pygameday.derive import build_summary
from pygameday.exceptions import GameDayError
from pygameday.models.forecast import ForecastSnapshot
from pygameday.models.historical import HistoricalPoint
from pygameday.models.metrics import MetricState
from pygameday.models.summary import DashboardSummary
from pygameday.state.store import MetricStore

_logger = logging.getLogger(__name__)


class GameDayClient:
    """Async client that keeps live metrics, forecasts and history together.

    Usage::

        async with GameDayClient(config) as client:
            await client.start_realtime()
            await client.fetch_forecasts()
            await client.refresh_historical()
            summary = client.summary()
    """

    def __init__(
        self,
        config: GameDayConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        store: MetricStore | None = None,
        transport: Transport | None = None,
        runtime_factory: RuntimeFactory | None = None,
    ) -> None:
        self._config = config or GameDayConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._store = store or MetricStore()
        self._bridge = RealtimeBridge(self._store, self._config, runtime_factory=runtime_factory)
        self._forecast: ForecastSnapshot | None = None
        self._historical: list[HistoricalPoint] = []

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GameDayClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop_realtime()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise GameDayError("Client not initialized. Use 'async with GameDayClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Accessors for the view layer
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameDayConfig:
        return self._config

    @property
    def store(self) -> MetricStore:
        return self._store

    @property
    def bridge(self) -> RealtimeBridge:
        return self._bridge

    @property
    def connection_state(self) -> ConnectionState:
        return self._bridge.state

    @property
    def latest_forecast(self) -> ForecastSnapshot | None:
        """Most recent successful forecast, or ``None`` before the first one."""
        return self._forecast

    @property
    def historical(self) -> list[HistoricalPoint]:
        """Most recent successfully fetched series (a copy)."""
        return list(self._historical)

    def snapshot(self) -> MetricState:
        return self._store.snapshot()

    def summary(self) -> DashboardSummary:
        return build_summary(self._store.snapshot(), self._forecast)

    # ------------------------------------------------------------------
    # Realtime
    # ------------------------------------------------------------------

    async def start_realtime(self) -> None:
        await self._bridge.activate()

    async def stop_realtime(self) -> None:
        await self._bridge.deactivate()

    # ------------------------------------------------------------------
    # Fetches
    # ------------------------------------------------------------------

    async def fetch_forecasts(self) -> ForecastSnapshot:
        """Fetch and keep the three forecast series.

        Any failure is raised unchanged and the previous snapshot is kept;
        whether to retry is up to the caller.
        """
        snapshot = await _forecast_api.fetch_forecasts(self._require_transport())
        self._forecast = snapshot
        return snapshot

    async def refresh_historical(
        self,
        window_days: int | None = None,
        *,
        now: datetime | None = None,
    ) -> list[HistoricalPoint]:
        """Fetch the historical series, keeping the previous one on failure.

        Returns the series held after the call, which is the old one when
        the fetch failed.
        """
        window = window_days if window_days is not None else self._config.history_window_days
        try:
            points = await _historical_api.fetch_historical_series(self._require_transport(), window, now=now)
        except GameDayError:
            _logger.error(
                "Error fetching historical data; keeping %d cached point(s)",
                len(self._historical),
                exc_info=True,
            )
            return self.historical
        self._historical = points
        return self.historical
