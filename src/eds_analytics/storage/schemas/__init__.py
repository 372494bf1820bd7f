"""Wire models for types, streams and events."""

from eds_analytics.storage.schemas.events import (
    AggregateRecord,
    SineEvent,
    StreamEvent,
)
from eds_analytics.storage.schemas.types import (
    PropertyValueType,
    SchemaType,
    SdsTypeCode,
    SemanticType,
    Stream,
    TypeProperty,
    WireModel,
)

__all__ = [
    "AggregateRecord",
    "PropertyValueType",
    "SchemaType",
    "SdsTypeCode",
    "SemanticType",
    "SineEvent",
    "Stream",
    "StreamEvent",
    "TypeProperty",
    "WireModel",
]
