"""Forecast endpoints.

Endpoints:
  - /predictions/attendance  -> ``{"data": {"expected": int}}``
  - /predictions/concessions -> ``{"data": {"forecast": number}}``
  - /predictions/parking     -> ``{"data": {"forecast": number}}``
"""

from __future__ import annotations

import asyncio
import logging

from pygameday._api._common import parse_data
from pygameday._constants import (
    ATTENDANCE_FORECAST_ENDPOINT,
    CONCESSIONS_FORECAST_ENDPOINT,
    PARKING_FORECAST_ENDPOINT,
)
from pygameday._transport import Transport
from pygameday.models.forecast import AttendanceForecast, ForecastSnapshot, ValueForecast

_logger = logging.getLogger(__name__)


async def fetch_attendance_forecast(transport: Transport) -> AttendanceForecast:
    response = await transport.get_json(ATTENDANCE_FORECAST_ENDPOINT)
    return parse_data(response, AttendanceForecast, ATTENDANCE_FORECAST_ENDPOINT)


async def fetch_concessions_forecast(transport: Transport) -> ValueForecast:
    response = await transport.get_json(CONCESSIONS_FORECAST_ENDPOINT)
    return parse_data(response, ValueForecast, CONCESSIONS_FORECAST_ENDPOINT)


async def fetch_parking_forecast(transport: Transport) -> ValueForecast:
    response = await transport.get_json(PARKING_FORECAST_ENDPOINT)
    return parse_data(response, ValueForecast, PARKING_FORECAST_ENDPOINT)


async def fetch_forecasts(transport: Transport) -> ForecastSnapshot:
    """Fetch all three forecast series concurrently and merge them.

    The call resolves only when every request succeeds.  The first failure
    is raised and no partial snapshot is produced; retrying is left to the
    caller.
    """
    tasks = [
        asyncio.ensure_future(fetch_attendance_forecast(transport)),
        asyncio.ensure_future(fetch_concessions_forecast(transport)),
        asyncio.ensure_future(fetch_parking_forecast(transport)),
    ]
    try:
        attendance, concessions, parking = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    _logger.debug(
        "Forecasts fetched expected=%s concessions=%s parking=%s",
        attendance.expected,
        concessions.forecast,
        parking.forecast,
    )
    return ForecastSnapshot(
        attendance_expected=attendance.expected,
        concessions_forecast=concessions.forecast,
        parking_forecast=parking.forecast,
    )
