"""Live metric models held by the metric store."""

from __future__ import annotations

from pydantic import Field

from pygameday.models._base import GameDayBaseModel


class ConcessionsState(GameDayBaseModel):
    """Concessions sub-record.

    ``sales`` and ``inventory`` are always replaced together.

    Parameters
    ----------
    sales : float
        Cumulative revenue.
    inventory : dict[str, int]
        Units sold per item name.
    """

    sales: float
    inventory: dict[str, int] = Field(default_factory=dict)


class ParkingState(GameDayBaseModel):
    """Parking sub-record.

    Counts may be negative when upstream reports more cars than free
    spaces; they are stored as received.
    """

    available: int
    occupied: int


class MetricState(GameDayBaseModel):
    """Point-in-time copy of the live game day metrics."""

    attendance: int
    concessions: ConcessionsState
    parking: ParkingState
