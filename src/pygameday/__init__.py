"""pygameday - Async Python client for live stadium game day metrics."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygameday")
except PackageNotFoundError:
    __version__ = "0+local"
from pygameday._realtime import ConnectionState
from pygameday.bridge import RealtimeBridge
from pygameday.client import GameDayClient
from pygameday.config import GameDayConfig, ReconnectPolicy
from pygameday.derive import (
    average_per_person,
    build_summary,
    classify_attendance,
    format_currency,
    format_number,
    parking_anomaly,
    total_capacity,
    total_inventory,
    utilization,
)
from pygameday.exceptions import (
    GameDayApiError,
    GameDayConfigError,
    GameDayError,
    GameDayPayloadError,
    GameDayTransportError,
)
from pygameday.models import (
    AttendanceStatus,
    AttendanceTier,
    ConcessionsState,
    DashboardSummary,
    ForecastSnapshot,
    HistoricalPoint,
    MetricState,
    ParkingState,
)
from pygameday.state import MetricStore

__all__ = [
    "__version__",
    "AttendanceStatus",
    "AttendanceTier",
    "ConcessionsState",
    "ConnectionState",
    "DashboardSummary",
    "ForecastSnapshot",
    "GameDayApiError",
    "GameDayClient",
    "GameDayConfig",
    "GameDayConfigError",
    "GameDayError",
    "GameDayPayloadError",
    "GameDayTransportError",
    "HistoricalPoint",
    "MetricState",
    "MetricStore",
    "ParkingState",
    "RealtimeBridge",
    "ReconnectPolicy",
    "average_per_person",
    "build_summary",
    "classify_attendance",
    "format_currency",
    "format_number",
    "parking_anomaly",
    "total_capacity",
    "total_inventory",
    "utilization",
]
