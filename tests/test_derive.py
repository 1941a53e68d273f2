"""Tests for the pure derivation functions."""

from __future__ import annotations

import math
from datetime import UTC, datetime

import pytest

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
from pygameday.models.forecast import ForecastSnapshot
from pygameday.models.summary import AttendanceTier
from pygameday.state.store import default_state

# ------------------------------------------------------------------
# classify_attendance
# ------------------------------------------------------------------


class TestClassifyAttendance:
    @pytest.mark.parametrize(
        ("current", "expected", "tier"),
        [
            (100, 100, AttendanceTier.EXCELLENT),
            (95, 100, AttendanceTier.EXCELLENT),
            (94, 100, AttendanceTier.GOOD),
            (85, 100, AttendanceTier.GOOD),
            (84, 100, AttendanceTier.FAIR),
            (75, 100, AttendanceTier.FAIR),
            (74, 100, AttendanceTier.BELOW_TARGET),
            (0, 100, AttendanceTier.BELOW_TARGET),
            (55390, 60725, AttendanceTier.GOOD),
        ],
    )
    def test_tiers(self, current: int, expected: int, tier: AttendanceTier) -> None:
        assert classify_attendance(current, expected).tier == tier

    @pytest.mark.parametrize("current", [0, 1, 55390, -5])
    def test_zero_expected_is_below_target(self, current: int) -> None:
        status = classify_attendance(current, 0)
        assert status.tier == AttendanceTier.BELOW_TARGET
        assert status.label == "Below Target"

    def test_labels_and_colors(self) -> None:
        assert classify_attendance(1, 1).color == "emerald"
        assert classify_attendance(9, 10).color == "violet"
        assert classify_attendance(8, 10).color == "amber"
        assert classify_attendance(1, 10).color == "rose"


# ------------------------------------------------------------------
# Parking / concessions ratios
# ------------------------------------------------------------------


def test_utilization_example() -> None:
    assert utilization(14250, 750) == 95


def test_utilization_zero_capacity_is_unavailable() -> None:
    assert utilization(0, 0) is None
    assert utilization(10, -10) is None


def test_utilization_does_not_clamp_over_capacity() -> None:
    # Seed data: 33234 occupied, -21234 available -> 12000 capacity.
    assert utilization(33234, -21234) == 277


def test_utilization_rounds_half_up() -> None:
    assert utilization(1, 7) == 13


def test_parking_anomaly() -> None:
    assert parking_anomaly(-1, 10)
    assert not parking_anomaly(0, 10)


def test_total_capacity() -> None:
    assert total_capacity(750, 14250) == 15000


def test_average_per_person() -> None:
    assert average_per_person(300.0, 3) == 100.0
    assert average_per_person(300.0, 0) is None
    assert average_per_person(300.0, -1) is None


def test_total_inventory() -> None:
    assert total_inventory({"A": 1500, "B": 2500, "C": 3000}) == 7000
    assert total_inventory({}) == 0


# ------------------------------------------------------------------
# Formatting
# ------------------------------------------------------------------


def test_format_currency() -> None:
    assert format_currency(238131) == "$238,131.00"
    assert format_currency(4.299) == "$4.30"
    assert format_currency(-5.5) == "-$5.50"
    assert format_currency(None) == "N/A"
    assert format_currency(math.nan) == "N/A"
    assert format_currency(math.inf) == "N/A"


def test_format_number() -> None:
    assert format_number(55390) == "55,390"
    assert format_number(-21234) == "-21,234"
    assert format_number(1234.5) == "1,234.5"
    assert format_number(None) == "N/A"


# ------------------------------------------------------------------
# Summary
# ------------------------------------------------------------------


def test_summary_without_forecast_coalesces_to_zero() -> None:
    summary = build_summary(default_state(), None)

    assert summary.attendance_target == 0
    assert summary.sales_forecast == 0.0
    assert summary.parking_forecast == 0.0
    assert summary.attendance_status.tier == AttendanceTier.BELOW_TARGET
    assert summary.forecast_fetched_at is None


def test_summary_with_forecast() -> None:
    fetched_at = datetime(2026, 10, 19, 18, 30, tzinfo=UTC)
    forecast = ForecastSnapshot(
        attendance_expected=60725,
        concessions_forecast=300000.0,
        parking_forecast=15000.0,
        fetched_at=fetched_at,
    )

    summary = build_summary(default_state(), forecast)

    assert summary.attendance_target == 60725
    assert summary.attendance_status.tier == AttendanceTier.GOOD
    assert summary.items_sold == 7000
    assert summary.average_per_person == pytest.approx(238131.0 / 55390)
    assert summary.total_capacity == 12000
    assert summary.utilization == 277
    assert summary.parking_anomaly is True
    assert summary.sales_forecast == 300000.0
    assert summary.forecast_fetched_at == fetched_at
