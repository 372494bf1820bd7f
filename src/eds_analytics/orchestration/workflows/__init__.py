"""
Workflow implementations.
"""

from eds_analytics.orchestration.workflows.analytics_workflow import AnalyticsWorkflow
from eds_analytics.orchestration.workflows.base import (
    BaseWorkflow,
    WorkflowResult,
    WorkflowValidationError,
)

__all__ = [
    "AnalyticsWorkflow",
    "BaseWorkflow",
    "WorkflowResult",
    "WorkflowValidationError",
]
