"""Historical rollup model."""

from __future__ import annotations

import datetime as dt

from pygameday.models._base import GameDayBaseModel


class HistoricalPoint(GameDayBaseModel):
    """One day's aggregated values for the three tracked metrics."""

    date: dt.date
    attendance: float
    concessions: float
    parking: float
