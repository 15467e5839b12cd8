"""Workflow Backbone - validation and serialization core for LLM workflow graphs."""

from workflow_backbone.errors import (
    ErrorKind,
    WorkflowValidationError,
)
from workflow_backbone.models.node import (
    DocumentInput,
    Node,
    NodeOutput,
    OutputFormat,
    PreviousResultInput,
)
from workflow_backbone.models.edge import TERMINAL, Edge
from workflow_backbone.models.graph import Graph
from workflow_backbone.models.final_result import FinalResultFormat, OutputCombination
from workflow_backbone.models.workflow import AttachedDocument, Workflow
from workflow_backbone.builders.workflow_builder import WorkflowBuilder

__all__ = [
    # Errors
    "ErrorKind",
    "WorkflowValidationError",
    # Models
    "DocumentInput",
    "Node",
    "NodeOutput",
    "OutputFormat",
    "PreviousResultInput",
    "TERMINAL",
    "Edge",
    "Graph",
    "FinalResultFormat",
    "OutputCombination",
    "AttachedDocument",
    "Workflow",
    # High-level APIs
    "WorkflowBuilder",
]
