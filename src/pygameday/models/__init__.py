"""Pydantic models for pygameday."""

from pygameday.models.forecast import AttendanceForecast, ForecastSnapshot, ValueForecast
from pygameday.models.historical import HistoricalPoint
from pygameday.models.metrics import ConcessionsState, MetricState, ParkingState
from pygameday.models.summary import AttendanceStatus, AttendanceTier, DashboardSummary

__all__ = [
    "AttendanceForecast",
    "AttendanceStatus",
    "AttendanceTier",
    "ConcessionsState",
    "DashboardSummary",
    "ForecastSnapshot",
    "HistoricalPoint",
    "MetricState",
    "ParkingState",
    "ValueForecast",
]
