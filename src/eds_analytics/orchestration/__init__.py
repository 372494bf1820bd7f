"""
Orchestration Layer
===================

Sequences provisioning, data exchange and aggregation into workflows.
"""

from eds_analytics.orchestration.ports import WorkflowState, WorkflowStatus

__all__ = ["WorkflowState", "WorkflowStatus"]
