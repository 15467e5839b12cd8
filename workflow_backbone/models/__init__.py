"""Core data models for the workflow backbone."""

from workflow_backbone.models.node import (
    ATTACHED_DOCUMENT,
    PREVIOUS_NODE_RESULT,
    DocumentInput,
    Node,
    NodeInput,
    NodeOutput,
    OutputFormat,
    PreviousResultInput,
    parse_node_input,
)
from workflow_backbone.models.edge import TERMINAL, Edge
from workflow_backbone.models.graph import Graph
from workflow_backbone.models.final_result import FinalResultFormat, OutputCombination
from workflow_backbone.models.workflow import AttachedDocument, Workflow

__all__ = [
    # Nodes
    "ATTACHED_DOCUMENT",
    "PREVIOUS_NODE_RESULT",
    "DocumentInput",
    "Node",
    "NodeInput",
    "NodeOutput",
    "OutputFormat",
    "PreviousResultInput",
    "parse_node_input",
    # Edges and graph
    "TERMINAL",
    "Edge",
    "Graph",
    # Final result
    "FinalResultFormat",
    "OutputCombination",
    # Workflow
    "AttachedDocument",
    "Workflow",
]
