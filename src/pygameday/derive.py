"""Pure derivations over metric state and forecasts.

Nothing here holds state. Ratios whose denominator is zero are reported as
``None`` ("unavailable") instead of leaking ``NaN``/``inf`` to the view layer.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from pygameday._constants import ATTENDANCE_TIERS, BELOW_TARGET, UNAVAILABLE_TEXT
from pygameday.models.forecast import ForecastSnapshot
from pygameday.models.metrics import MetricState
from pygameday.models.summary import AttendanceStatus, AttendanceTier, DashboardSummary


def _ratio(numerator: float, denominator: float) -> float:
    # An undefined ratio compares false against every tier bound.
    if denominator == 0:
        return math.nan
    return numerator / denominator


def classify_attendance(current: float, expected: float) -> AttendanceStatus:
    """Classify current attendance against the expected head-count.

    Tiers are closed below: a ratio of exactly 0.95 is ``Excellent``.
    ``expected == 0`` always yields ``Below Target``.
    """
    ratio = _ratio(current, expected)
    for bound, label, color in ATTENDANCE_TIERS:
        if ratio >= bound:
            return AttendanceStatus(tier=AttendanceTier(label), label=label, color=color)
    label, color = BELOW_TARGET
    return AttendanceStatus(tier=AttendanceTier.BELOW_TARGET, label=label, color=color)


def total_capacity(available: int, occupied: int) -> int:
    return available + occupied


def utilization(occupied: int, available: int) -> int | None:
    """Occupied share of total capacity, in whole percent.

    Returns ``None`` when the implied capacity is zero. Negative counts are
    not corrected; see :func:`parking_anomaly`.
    """
    capacity = total_capacity(available, occupied)
    if capacity == 0:
        return None
    # Half-up, so 12.5 reads as 13.
    return math.floor(100 * occupied / capacity + 0.5)


def parking_anomaly(available: int, occupied: int) -> bool:
    """``True`` when upstream reports a negative parking count."""
    return available < 0 or occupied < 0


def average_per_person(sales: float, attendance: int) -> float | None:
    if attendance <= 0:
        return None
    return sales / attendance


def total_inventory(inventory: Mapping[str, int]) -> int:
    return sum(inventory.values())


def _is_displayable(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def format_currency(value: float | None) -> str:
    """Format as US dollars, e.g. ``$238,131.00`` or ``-$5.50``."""
    if value is None or not _is_displayable(value):
        return UNAVAILABLE_TEXT
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_number(value: float | None) -> str:
    """Format with US digit grouping, keeping up to three decimals."""
    if value is None or not _is_displayable(value):
        return UNAVAILABLE_TEXT
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def build_summary(state: MetricState, forecast: ForecastSnapshot | None) -> DashboardSummary:
    """Derive every value the live dashboard cards display.

    Missing forecasts count as ``0`` from here on.
    """
    expected = (forecast.attendance_expected if forecast else None) or 0
    sales_forecast = (forecast.concessions_forecast if forecast else None) or 0.0
    parking_forecast = (forecast.parking_forecast if forecast else None) or 0.0
    parking = state.parking

    return DashboardSummary(
        attendance=state.attendance,
        attendance_target=expected,
        attendance_status=classify_attendance(state.attendance, expected),
        sales=state.concessions.sales,
        sales_forecast=sales_forecast,
        items_sold=total_inventory(state.concessions.inventory),
        average_per_person=average_per_person(state.concessions.sales, state.attendance),
        parking_available=parking.available,
        parking_occupied=parking.occupied,
        parking_forecast=parking_forecast,
        total_capacity=total_capacity(parking.available, parking.occupied),
        utilization=utilization(parking.occupied, parking.available),
        parking_anomaly=parking_anomaly(parking.available, parking.occupied),
        forecast_fetched_at=forecast.fetched_at if forecast else None,
    )
