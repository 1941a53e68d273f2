"""Presentation-ready values derived from state and forecasts."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pygameday.models._base import GameDayBaseModel


class AttendanceTier(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    BELOW_TARGET = "Below Target"


class AttendanceStatus(GameDayBaseModel):
    tier: AttendanceTier
    label: str
    color: str


class DashboardSummary(GameDayBaseModel):
    """Everything the view layer renders for the live cards.

    Forecast values are coalesced to ``0`` here when the forecast has not
    been fetched; derived ratios are ``None`` when they are undefined.

    Parameters
    ----------
    attendance : int
        Current head-count.
    attendance_target : int
        Expected attendance, ``0`` when unknown.
    attendance_status : AttendanceStatus
        Tier of current vs expected attendance.
    sales : float
        Current concessions revenue.
    sales_forecast : float
        Forecast concessions revenue, ``0`` when unknown.
    items_sold : int
        Sum of the inventory counts.
    average_per_person : float or None
        Revenue per attendee, ``None`` without attendees.
    parking_available : int
        Free spaces as reported upstream.
    parking_occupied : int
        Occupied spaces as reported upstream.
    parking_forecast : float
        Forecast parking demand, ``0`` when unknown.
    total_capacity : int
        ``parking_available + parking_occupied``.
    utilization : int or None
        Occupied share of total capacity in percent, ``None`` at zero capacity.
    parking_anomaly : bool
        Set when upstream reported negative parking counts.
    forecast_fetched_at : datetime or None
        When the forecast behind the targets was fetched, ``None`` before
        the first fetch.
    """

    attendance: int
    attendance_target: int
    attendance_status: AttendanceStatus
    sales: float
    sales_forecast: float
    items_sold: int
    average_per_person: float | None
    parking_available: int
    parking_occupied: int
    parking_forecast: float
    total_capacity: int
    utilization: int | None
    parking_anomaly: bool
    forecast_fetched_at: datetime | None = None
