"""Data exchange layer: typed event I/O and summary parsing."""

from eds_analytics.exchange.data_exchange import (
    DataExchange,
    deserialize_events,
    serialize_events,
)
from eds_analytics.exchange.summary import (
    SummaryRecord,
    SummaryValue,
    extract_summary_value,
    parse_summary,
)

__all__ = [
    "DataExchange",
    "SummaryRecord",
    "SummaryValue",
    "deserialize_events",
    "extract_summary_value",
    "parse_summary",
    "serialize_events",
]
