"""
Summary Response Parsing
========================

Typed view over the store's summary query response.

Expected format (one record per requested interval, we request one):
[
    {
        "Start": {...},
        "End": {...},
        "Summaries": {
            "Count": {"Value": 100},
            "Mean": {"Value": 0.0046},
            "Minimum": {"Value": -0.9999},
            ...
        }
    }
]
"""

import json
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from eds_analytics.infrastructure.observability import get_exchange_logger
from eds_analytics.transport.exceptions import DecodeError

log = get_exchange_logger("summary-parser")


class SummaryValue(BaseModel):
    """One statistic. ``value`` is None when the store omitted it."""

    value: float | None = Field(None, alias="Value")

    class Config:
        extra = "allow"
        populate_by_name = True


class SummaryRecord(BaseModel):
    """One summary interval, statistics keyed by name."""

    summaries: dict[str, SummaryValue] = Field(..., alias="Summaries")

    class Config:
        extra = "allow"
        populate_by_name = True

    @field_validator("summaries", mode="before")
    @classmethod
    def coerce_entries(cls, v: Any) -> Any:
        # An entry that isn't an object carries no Value
        if isinstance(v, dict):
            return {k: (e if isinstance(e, dict) else {}) for k, e in v.items()}
        return v

    def get(self, property_name: str) -> float | None:
        entry = self.summaries.get(property_name)
        return entry.value if entry is not None else None


def unwrap_summary(raw: Any) -> dict[str, Any]:
    """Strip the enclosing array framing from a summary response.

    Accepts the decoded body, or its JSON text.

    Raises:
        DecodeError: If the payload isn't exactly one summary object
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise DecodeError(f"Summary response is not valid JSON: {e}") from e

    if isinstance(raw, list):
        if len(raw) != 1:
            raise DecodeError(
                f"Expected exactly one summary record, got {len(raw)}"
            )
        raw = raw[0]

    if not isinstance(raw, dict):
        raise DecodeError(
            f"Summary record must be an object, got {type(raw).__name__}"
        )
    return raw


def parse_summary(raw: Any) -> SummaryRecord:
    """Decode a raw summary response into a SummaryRecord.

    Raises:
        DecodeError: On framing problems or a missing/invalid Summaries object
    """
    try:
        return SummaryRecord.model_validate(unwrap_summary(raw))
    except ValidationError as e:
        raise DecodeError(f"Invalid summary record: {e}") from e


def extract_summary_value(
    summary: SummaryRecord | Any,
    property_name: str,
    on_missing: float = 0.0,
) -> float:
    """Read one statistic from a summary response.

    Args:
        summary: Parsed SummaryRecord or the raw response body
        property_name: Statistic name (e.g. "Mean")
        on_missing: Returned when the statistic or its Value is absent

    Returns:
        The statistic as float, or ``on_missing``
    """
    record = summary if isinstance(summary, SummaryRecord) else parse_summary(summary)
    value = record.get(property_name)
    if value is None:
        log.warning(
            "summary_value_missing", property=property_name, fallback=on_missing
        )
        return on_missing
    log.info("summary_value_extracted", property=property_name, value=value)
    return value
