"""Historical rollup endpoint.

Endpoint:
  - /analytics/historical?startDate=<iso>&endDate=<iso>
    -> ``{"data": [{"date", "attendance", "concessions", "parking"}, ...]}``
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from pydantic import TypeAdapter, ValidationError

from pygameday._api._common import extract_data
from pygameday._constants import HISTORICAL_ENDPOINT
from pygameday._transport import Transport
from pygameday.exceptions import GameDayApiError
from pygameday.models.historical import HistoricalPoint

_logger = logging.getLogger(__name__)

_SERIES_ADAPTER: TypeAdapter[list[HistoricalPoint]] = TypeAdapter(list[HistoricalPoint])


def query_window(window_days: int, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return ``(now - window_days, now)`` in UTC."""
    if window_days <= 0:
        raise ValueError(f"window_days must be positive, got {window_days}")
    end = now or datetime.now(UTC)
    if end.tzinfo is None:
        end = end.replace(tzinfo=UTC)
    return end - timedelta(days=window_days), end


async def fetch_historical_series(
    transport: Transport,
    window_days: int,
    *,
    now: datetime | None = None,
) -> list[HistoricalPoint]:
    """Fetch the daily rollups for the last *window_days* days.

    The sequence is returned in the order the upstream sent it.
    """
    start, end = query_window(window_days, now)
    params = {"startDate": start.isoformat(), "endDate": end.isoformat()}
    response = await transport.get_json(HISTORICAL_ENDPOINT, params)

    data = extract_data(response, HISTORICAL_ENDPOINT)
    try:
        points = _SERIES_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise GameDayApiError(
            f"Unexpected payload from {HISTORICAL_ENDPOINT}: {exc}",
            endpoint=HISTORICAL_ENDPOINT,
        ) from exc

    _logger.debug("Historical series fetched points=%d window_days=%d", len(points), window_days)
    return points
