"""Time-window aggregation package."""

from finance_tracker.queries.aggregator import TimeWindowAggregator

__all__ = ["TimeWindowAggregator"]
