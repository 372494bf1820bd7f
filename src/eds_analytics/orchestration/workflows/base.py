"""
Base Workflow Implementation
============================

Provides the base workflow class and its result container.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from eds_analytics.common.utils.date_utils import utc_now
from eds_analytics.infrastructure.observability import get_orchestration_logger
from eds_analytics.orchestration.ports import WorkflowState, WorkflowStatus
from eds_analytics.storage.schemas.events import AggregateRecord
from eds_analytics.transport.exceptions import EdsAnalyticsError


class WorkflowValidationError(EdsAnalyticsError):
    """Workflow preconditions are not met."""

    def __init__(self, errors: list[str]):
        super().__init__(f"Workflow validation failed: {errors}")
        self.errors = errors


@dataclass
class WorkflowResult:
    """Result of workflow execution."""

    status: WorkflowStatus
    state: WorkflowState
    duration_seconds: float = 0.0
    events_written: int = 0
    events_read: int = 0
    filtered_count: int = 0
    local_aggregate: AggregateRecord | None = None
    remote_aggregate: AggregateRecord | None = None
    created_resources: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "state": self.state.value,
            "duration_seconds": self.duration_seconds,
            "events_written": self.events_written,
            "events_read": self.events_read,
            "filtered_count": self.filtered_count,
            "local_aggregate": (
                self.local_aggregate.to_wire() if self.local_aggregate else None
            ),
            "remote_aggregate": (
                self.remote_aggregate.to_wire() if self.remote_aggregate else None
            ),
            "created_resources": self.created_resources,
            "errors": self.errors,
        }


class BaseWorkflow(ABC):
    """
    Base class for workflow implementations.

    Standard lifecycle:
    1. Validate preconditions
    2. Execute workflow logic
    3. On failure: mark FAILED, log, run on_failure hook, re-raise
    4. Report results

    Subclasses implement _execute_impl() with specific business logic.
    """

    def __init__(self):
        self._status = WorkflowStatus.PENDING
        self._start_time: datetime | None = None
        self._end_time: datetime | None = None
        self.log = get_orchestration_logger(workflow=self.__class__.__name__)

    async def execute(self) -> WorkflowResult:
        """
        Execute the workflow with standard lifecycle.

        Returns:
            WorkflowResult of a successful run

        Raises:
            WorkflowValidationError: If preconditions fail
            Exception: The error of the failing step, unchanged
        """
        self._start_time = utc_now()
        self._status = WorkflowStatus.RUNNING
        self.log.info("workflow_started")

        try:
            is_valid, errors = await self.validate()
            if not is_valid:
                raise WorkflowValidationError(errors)

            result = await self._execute_impl()

            self._status = WorkflowStatus.SUCCESS
            self._end_time = utc_now()
            result.status = self._status
            result.duration_seconds = self.duration_seconds
            self.log.info("workflow_completed", duration_seconds=result.duration_seconds)
            return result

        except Exception as e:
            self._status = WorkflowStatus.FAILED
            self._end_time = utc_now()
            self.log.error(
                "workflow_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=self.duration_seconds,
            )
            await self.on_failure(e)
            raise

    @property
    def duration_seconds(self) -> float:
        if self._start_time is None:
            return 0.0
        end = self._end_time or utc_now()
        return (end - self._start_time).total_seconds()

    async def validate(self) -> tuple[bool, list[str]]:
        """
        Validate workflow preconditions.

        Default implementation always returns valid.
        """
        return True, []

    async def on_failure(self, error: Exception) -> None:
        """Hook run after a failure is recorded, before the error propagates."""
        return None

    @abstractmethod
    async def _execute_impl(self) -> WorkflowResult:
        """Execute workflow-specific logic."""

    def get_status(self) -> WorkflowStatus:
        """Get current workflow status."""
        return self._status
