"""Forecast models."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from pygameday.models._base import GameDayBaseModel


class AttendanceForecast(GameDayBaseModel):
    """``data`` body of the attendance forecast endpoint."""

    expected: int


class ValueForecast(GameDayBaseModel):
    """``data`` body of the concessions and parking forecast endpoints."""

    forecast: float


class ForecastSnapshot(GameDayBaseModel):
    """Merged result of one forecast fetch cycle.

    A field is ``None`` until its series has been fetched; it is never
    defaulted to zero here.
    """

    attendance_expected: int | None = None
    concessions_forecast: float | None = None
    parking_forecast: float | None = None
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
