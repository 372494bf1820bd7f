"""In-memory filtering and aggregation over retrieved series."""

from collections.abc import Iterable, Sequence
from datetime import datetime

import numpy as np

from eds_analytics.infrastructure.observability import get_processing_logger
from eds_analytics.storage.schemas.events import AggregateRecord, SineEvent
from eds_analytics.transport.exceptions import EmptyInputError

logger = get_processing_logger("aggregator")


def filter_by_threshold(
    events: Sequence[SineEvent], lower: float, upper: float
) -> list[SineEvent]:
    """Keep events whose value lies strictly outside ``[lower, upper]``.

    Input order is preserved; the input sequence is not modified.

    Raises:
        ValueError: If ``lower`` is greater than ``upper``
    """
    if lower > upper:
        raise ValueError(f"lower bound {lower} is greater than upper bound {upper}")

    kept = [e for e in events if e.value > upper or e.value < lower]
    logger.info(
        "events_filtered", received=len(events), kept=len(kept), lower=lower, upper=upper
    )
    return kept


def compute_aggregate(values: Iterable[float], at_timestamp: datetime) -> AggregateRecord:
    """Mean, minimum, maximum and range of a numeric series.

    Raises:
        EmptyInputError: If ``values`` is empty
    """
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        raise EmptyInputError("Cannot aggregate an empty series")

    minimum = float(arr.min())
    maximum = float(arr.max())
    record = AggregateRecord(
        timestamp=at_timestamp,
        mean=float(arr.mean()),
        minimum=minimum,
        maximum=maximum,
        range=maximum - minimum,
    )
    logger.info(
        "aggregate_computed",
        count=int(arr.size),
        mean=record.mean,
        minimum=record.minimum,
        maximum=record.maximum,
        range=record.range,
    )
    return record
