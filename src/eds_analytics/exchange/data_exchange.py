"""
Data Exchange
=============

Typed event I/O over the transport client:
- serialize event batches for writes
- deserialize stream reads into event models
- query summaries and parse them into SummaryRecord
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, TypeVar

from pydantic import ValidationError

from eds_analytics.exchange.summary import SummaryRecord, parse_summary
from eds_analytics.infrastructure.observability import get_exchange_logger
from eds_analytics.storage.schemas.events import StreamEvent
from eds_analytics.storage.schemas.types import Stream
from eds_analytics.transport.client import SdsClient
from eds_analytics.transport.exceptions import DecodeError, DuplicateKeyError

E = TypeVar("E", bound=StreamEvent)


def serialize_events(events: Sequence[StreamEvent]) -> list[dict[str, Any]]:
    """Serialize a batch, rejecting repeated key values.

    Raises:
        DuplicateKeyError: If two events share a key
    """
    seen: set[Any] = set()
    payload = []
    for event in events:
        if event.key in seen:
            raise DuplicateKeyError(
                f"Duplicate {event.key_field} {event.key.isoformat()} in write batch",
                key=event.key,
            )
        seen.add(event.key)
        payload.append(event.to_wire())
    return payload


def deserialize_events(payload: Any, event_type: type[E]) -> list[E]:
    """Validate a decoded JSON array into event models.

    Raises:
        DecodeError: If the payload isn't a list of valid events
    """
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a list of events, got {type(payload).__name__}")
    try:
        return [event_type.model_validate(item) for item in payload]
    except ValidationError as e:
        raise DecodeError(f"Invalid {event_type.__name__} in response: {e}") from e


def _stream_id(stream: Stream | str) -> str:
    return stream.id if isinstance(stream, Stream) else stream


class DataExchange:
    """Read and write typed events on streams."""

    def __init__(self, client: SdsClient):
        self.client = client

    async def write_events(
        self, stream: Stream | str, events: Sequence[StreamEvent]
    ) -> int:
        """Write a batch in one request. Returns the number of events sent."""
        stream_id = _stream_id(stream)
        payload = serialize_events(events)
        await self.client.write_events(stream_id, payload)
        return len(payload)

    async def read_events(
        self,
        stream: Stream | str,
        start: datetime,
        count: int,
        event_type: type[E],
    ) -> list[E]:
        """Read up to ``count`` events at or after ``start``."""
        stream_id = _stream_id(stream)
        payload = await self.client.read_events(stream_id, start, count)
        events = deserialize_events(payload, event_type)
        get_exchange_logger(stream_id=stream_id).debug(
            "events_decoded", event_type=event_type.__name__, count=len(events)
        )
        return events

    async def query_summary(
        self, stream: Stream | str, start: datetime, end: datetime
    ) -> SummaryRecord:
        """Ask the store for one summary over ``[start, end]``."""
        raw = await self.client.read_summary(_stream_id(stream), start, end)
        return parse_summary(raw)
