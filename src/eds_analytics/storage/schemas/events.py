"""Event models written to and read from streams.

Every event is keyed by a timezone-aware UTC timestamp.
"""

import math
from datetime import datetime, timedelta
from typing import ClassVar

from pydantic import Field, field_validator

from eds_analytics.common.utils.date_utils import ensure_utc
from eds_analytics.storage.schemas.types import WireModel


class StreamEvent(WireModel):
    """Base event: the timestamp is the stream key."""

    key_field: ClassVar[str] = "timestamp"

    timestamp: datetime = Field(..., alias="Timestamp")

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def key(self) -> datetime:
        return getattr(self, self.key_field)


class SineEvent(StreamEvent):
    """One sample of a sine wave.

    A read event without "Value" is 0.0: stores may omit default-valued fields.
    """

    value: float = Field(0.0, alias="Value")

    @classmethod
    def from_index(cls, index: int, start: datetime) -> "SineEvent":
        """Build the sample for ``index``: value sin(index) at start + index seconds."""
        return cls(
            timestamp=start + timedelta(seconds=index),
            value=math.sin(index),
        )


class AggregateRecord(StreamEvent):
    """Statistical summary of a numeric series at one reporting instant."""

    mean: float = Field(..., alias="Mean")
    minimum: float = Field(..., alias="Minimum")
    maximum: float = Field(..., alias="Maximum")
    range: float = Field(..., alias="Range")
