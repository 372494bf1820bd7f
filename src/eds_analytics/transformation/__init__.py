"""Transformation layer: filtering and aggregation of retrieved series."""

from eds_analytics.transformation.aggregation import (
    compute_aggregate,
    filter_by_threshold,
)

__all__ = ["compute_aggregate", "filter_by_threshold"]
