"""
Analytics Workflow
==================

Filtering and aggregation demo against an Edge Data Store:

    Data filtering
      1. Create the SineWave type and stream
      2. Write sin(i) samples, one per second
      3. Read them back
      4. Create FilteredSineWave and write the samples outside the bounds
    Data aggregation
      5. Compute mean/min/max/range locally, write to CalculatedAggregatedData
      6. Ask the store for the same summary, write to EdsApiAggregatedData
    Clean-up
      7. Delete every stream, then every type

Steps run strictly in order; any failure stops the run and propagates.
Resources created before a failure are left in place unless
cleanup_on_failure is set.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from eds_analytics.common.utils.date_utils import utc_now
from eds_analytics.config.state import WorkflowConfig
from eds_analytics.exchange.data_exchange import DataExchange
from eds_analytics.exchange.summary import SummaryRecord, extract_summary_value
from eds_analytics.orchestration.ports import (
    WORKFLOW_SEQUENCE,
    WorkflowState,
    WorkflowStatus,
)
from eds_analytics.orchestration.workflows.base import BaseWorkflow, WorkflowResult
from eds_analytics.provisioning.provisioner import TypeStreamProvisioner
from eds_analytics.provisioning.schema_builder import double_property, timestamp_key
from eds_analytics.storage.schemas.events import AggregateRecord, SineEvent
from eds_analytics.storage.schemas.types import SchemaType, Stream
from eds_analytics.transformation.aggregation import (
    compute_aggregate,
    filter_by_threshold,
)

TIMESTAMP = "Timestamp"
VALUE = "Value"
MEAN = "Mean"
MINIMUM = "Minimum"
MAXIMUM = "Maximum"
RANGE = "Range"


class AnalyticsWorkflow(BaseWorkflow):
    """Provision, write, read, filter, aggregate and tear down."""

    def __init__(
        self,
        provisioner: TypeStreamProvisioner,
        exchange: DataExchange,
        config: WorkflowConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            provisioner: Type/stream lifecycle for the target namespace
            exchange: Typed event I/O for the same namespace
            config: Workflow knobs (event count, bounds, resource ids)
            clock: Source of the first sample's timestamp
        """
        super().__init__()
        self.provisioner = provisioner
        self.exchange = exchange
        self.config = config or WorkflowConfig()
        self.clock = clock
        self.state = WorkflowState.INIT
        self.result = WorkflowResult(status=WorkflowStatus.PENDING, state=self.state)
        self._types: list[SchemaType] = []
        self._streams: list[Stream] = []

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _advance(self, next_state: WorkflowState) -> None:
        expected = WORKFLOW_SEQUENCE[WORKFLOW_SEQUENCE.index(self.state) + 1]
        if next_state is not expected:
            raise RuntimeError(
                f"Illegal transition {self.state.value} -> {next_state.value}"
            )
        self.log.info(
            "workflow_state_changed", previous=self.state.value, state=next_state.value
        )
        self.state = next_state
        self.result.state = next_state
        self.log = self.log.bind(state=next_state.value)

    async def _create_type(self, type_id: str, properties: list) -> SchemaType:
        sds_type = await self.provisioner.create_type(type_id, type_id, properties)
        self._types.append(sds_type)
        self.result.created_resources.append(f"Types/{type_id}")
        return sds_type

    async def _create_stream(self, sds_type: SchemaType, stream_id: str) -> Stream:
        stream = await self.provisioner.create_stream(sds_type, stream_id, stream_id)
        self._streams.append(stream)
        self.result.created_resources.append(f"Streams/{stream_id}")
        return stream

    async def validate(self) -> tuple[bool, list[str]]:
        cfg = self.config
        stream_ids = [
            cfg.sine_stream_id,
            cfg.filtered_stream_id,
            cfg.calculated_stream_id,
            cfg.remote_stream_id,
        ]
        errors = []
        if len(set(stream_ids)) != len(stream_ids):
            errors.append(f"Stream ids must be distinct: {stream_ids}")
        if cfg.sine_type_id == cfg.aggregate_type_id:
            errors.append("Sine and aggregate type ids must differ")
        return not errors, errors

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _execute_impl(self) -> WorkflowResult:
        cfg = self.config
        first_timestamp = self.clock()
        n = cfg.event_count

        # ============ Data Filtering ============
        sine_type = await self._create_type(
            cfg.sine_type_id, [timestamp_key(TIMESTAMP), double_property(VALUE)]
        )
        self._advance(WorkflowState.TYPE_CREATED)

        sine_stream = await self._create_stream(sine_type, cfg.sine_stream_id)
        self._advance(WorkflowState.STREAM_CREATED)

        wave = [SineEvent.from_index(i, first_timestamp) for i in range(n)]
        self.result.events_written = await self.exchange.write_events(sine_stream, wave)
        self._advance(WorkflowState.DATA_WRITTEN)

        returned = await self.exchange.read_events(
            sine_stream, wave[0].timestamp, n, SineEvent
        )
        self.result.events_read = len(returned)
        if len(returned) != n:
            self.log.warning("short_read", expected=n, received=len(returned))
        self._advance(WorkflowState.DATA_READ)

        filtered_stream = await self._create_stream(sine_type, cfg.filtered_stream_id)
        self._advance(WorkflowState.FILTERED_STREAM_CREATED)

        filtered = filter_by_threshold(returned, cfg.lower_bound, cfg.upper_bound)
        self.result.filtered_count = await self.exchange.write_events(
            filtered_stream, filtered
        )
        self._advance(WorkflowState.FILTERED_DATA_WRITTEN)

        # ============ Data Aggregation ============
        local = compute_aggregate((e.value for e in returned), first_timestamp)
        self.result.local_aggregate = local
        self._advance(WorkflowState.LOCAL_AGGREGATE_COMPUTED)

        aggregate_type = await self._create_type(
            cfg.aggregate_type_id,
            [
                timestamp_key(TIMESTAMP),
                double_property(MEAN),
                double_property(MINIMUM),
                double_property(MAXIMUM),
                double_property(RANGE),
            ],
        )
        calculated_stream = await self._create_stream(
            aggregate_type, cfg.calculated_stream_id
        )
        self._advance(WorkflowState.LOCAL_AGGREGATE_STREAM_CREATED)

        await self.exchange.write_events(calculated_stream, [local])
        self._advance(WorkflowState.LOCAL_AGGREGATE_WRITTEN)

        summary = await self.exchange.query_summary(
            sine_stream, first_timestamp, first_timestamp + timedelta(seconds=n)
        )
        remote = self._aggregate_from_summary(summary, first_timestamp)
        self.result.remote_aggregate = remote
        self._advance(WorkflowState.REMOTE_SUMMARY_QUERIED)

        remote_stream = await self._create_stream(aggregate_type, cfg.remote_stream_id)
        self._advance(WorkflowState.REMOTE_AGGREGATE_STREAM_CREATED)

        await self.exchange.write_events(remote_stream, [remote])
        self._advance(WorkflowState.REMOTE_AGGREGATE_WRITTEN)

        # ============ Clean-Up ============
        await self._teardown()
        self._advance(WorkflowState.TORN_DOWN)

        self._advance(WorkflowState.DONE)
        return self.result

    @staticmethod
    def _aggregate_from_summary(
        summary: SummaryRecord, timestamp: datetime
    ) -> AggregateRecord:
        return AggregateRecord(
            timestamp=timestamp,
            mean=extract_summary_value(summary, MEAN, on_missing=0.0),
            minimum=extract_summary_value(summary, MINIMUM, on_missing=0.0),
            maximum=extract_summary_value(summary, MAXIMUM, on_missing=0.0),
            range=extract_summary_value(summary, RANGE, on_missing=0.0),
        )

    async def _teardown(self) -> None:
        """Delete streams, then types, in creation order."""
        while self._streams:
            await self.provisioner.delete_stream(self._streams[0])
            self._streams.pop(0)
        while self._types:
            await self.provisioner.delete_type(self._types[0])
            self._types.pop(0)

    async def on_failure(self, error: Exception) -> None:
        failed_in = self.state
        self.state = WorkflowState.FAILED
        self.result.state = WorkflowState.FAILED
        self.result.status = WorkflowStatus.FAILED
        self.result.errors.append(f"{failed_in.value}: {error}")

        if not self.config.cleanup_on_failure:
            if self._streams or self._types:
                self.log.warning(
                    "resources_left_behind",
                    streams=[s.id for s in self._streams],
                    types=[t.id for t in self._types],
                )
            return

        # Best effort: keep going past individual failures, original error wins
        for stream in list(self._streams):
            try:
                await self.provisioner.delete_stream(stream)
                self._streams.remove(stream)
            except Exception as e:
                self.log.error("cleanup_failed", stream_id=stream.id, error=str(e))
        for sds_type in list(self._types):
            try:
                await self.provisioner.delete_type(sds_type)
                self._types.remove(sds_type)
            except Exception as e:
                self.log.error("cleanup_failed", type_id=sds_type.id, error=str(e))
