"""State/store layer.

This package is the single source of truth for the live game day metrics.
Realtime events and local callers mutate it through the named entry points
of :class:`pygameday.state.store.MetricStore` only.
"""

from pygameday.state.store import MetricListener, MetricStore

__all__ = ["MetricListener", "MetricStore"]
