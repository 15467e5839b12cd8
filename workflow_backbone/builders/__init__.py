"""Fluent construction API for workflows."""

from workflow_backbone.builders.workflow_builder import (
    FinalResultBuilder,
    NodeBuilder,
    WorkflowBuilder,
)

__all__ = [
    "FinalResultBuilder",
    "NodeBuilder",
    "WorkflowBuilder",
]
