"""
Orchestration Layer Definitions
===============================

Workflow status and the linear state machine of the analytics workflow.
"""

from enum import Enum
from typing import Any, Protocol, runtime_checkable


class WorkflowStatus(str, Enum):
    """Workflow execution status."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class WorkflowState(str, Enum):
    """Steps of the analytics workflow, in execution order.

    Each state is the precondition of the next. FAILED is terminal and
    reachable from any state.
    """

    INIT = "init"
    TYPE_CREATED = "type_created"
    STREAM_CREATED = "stream_created"
    DATA_WRITTEN = "data_written"
    DATA_READ = "data_read"
    FILTERED_STREAM_CREATED = "filtered_stream_created"
    FILTERED_DATA_WRITTEN = "filtered_data_written"
    LOCAL_AGGREGATE_COMPUTED = "local_aggregate_computed"
    LOCAL_AGGREGATE_STREAM_CREATED = "local_aggregate_stream_created"
    LOCAL_AGGREGATE_WRITTEN = "local_aggregate_written"
    REMOTE_SUMMARY_QUERIED = "remote_summary_queried"
    REMOTE_AGGREGATE_STREAM_CREATED = "remote_aggregate_stream_created"
    REMOTE_AGGREGATE_WRITTEN = "remote_aggregate_written"
    TORN_DOWN = "torn_down"
    DONE = "done"
    FAILED = "failed"


WORKFLOW_SEQUENCE: tuple[WorkflowState, ...] = tuple(
    s for s in WorkflowState if s is not WorkflowState.FAILED
)


@runtime_checkable
class IWorkflow(Protocol):
    """Protocol defining workflow execution interface."""

    async def execute(self) -> Any:
        """
        Execute the workflow.

        Raises:
            Exception: Whatever step failed, after the workflow is marked FAILED
        """
        ...

    async def validate(self) -> tuple[bool, list[str]]:
        """
        Validate workflow preconditions.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        ...
