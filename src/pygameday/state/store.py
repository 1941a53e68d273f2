"""Authoritative in-memory metric store.

This is the only component allowed to hold and replace live metric state.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping

from pygameday._constants import (
    SEED_ATTENDANCE,
    SEED_INVENTORY,
    SEED_PARKING_AVAILABLE,
    SEED_PARKING_OCCUPIED,
    SEED_SALES,
)
from pygameday.models.metrics import ConcessionsState, MetricState, ParkingState

_logger = logging.getLogger(__name__)

MetricListener = Callable[[MetricState], None]


def default_state() -> MetricState:
    return MetricState(
        attendance=SEED_ATTENDANCE,
        concessions=ConcessionsState(sales=SEED_SALES, inventory=dict(SEED_INVENTORY)),
        parking=ParkingState(available=SEED_PARKING_AVAILABLE, occupied=SEED_PARKING_OCCUPIED),
    )


class MetricStore:
    """In-memory store for the live attendance, concessions and parking metrics.

    Each mutation replaces one whole sub-record with a new frozen model, so a
    reader holding a snapshot sees either the previous or the new record,
    never a mix.  Subscribers are notified synchronously before the mutation
    returns.
    """

    def __init__(self, initial: MetricState | None = None) -> None:
        self._state = (initial or default_state()).model_copy(deep=True)
        self._listeners: list[MetricListener] = []

    def snapshot(self) -> MetricState:
        """Return a deep copy of the current state."""
        return self._state.model_copy(deep=True)

    def subscribe(self, listener: MetricListener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def set_attendance(self, value: int) -> None:
        """Replace the attendance head-count. No bounds are enforced."""
        self._replace(self._state.model_copy(update={"attendance": value}))

    def update_concessions(self, sales: float, inventory: Mapping[str, int]) -> None:
        """Replace sales and inventory together."""
        concessions = ConcessionsState(sales=sales, inventory=copy.deepcopy(dict(inventory)))
        self._replace(self._state.model_copy(update={"concessions": concessions}))

    def update_parking(self, available: int, occupied: int) -> None:
        """Replace both parking counts together. Negative values are kept."""
        parking = ParkingState(available=available, occupied=occupied)
        self._replace(self._state.model_copy(update={"parking": parking}))

    def _replace(self, state: MetricState) -> None:
        self._state = state
        if not self._listeners:
            return
        snapshot = self.snapshot()
        # Iterate over a copy; listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                _logger.warning("Metric listener %r failed", listener, exc_info=True)
