"""Temporal social graph: registry plus neighborhood traversal."""
from .registry import GraphRegistry, utc_now
from .traversal import event_dates, expand, neighborhood, neighborhood_trend

__all__ = [
    "GraphRegistry",
    "utc_now",
    "event_dates",
    "expand",
    "neighborhood",
    "neighborhood_trend",
]
