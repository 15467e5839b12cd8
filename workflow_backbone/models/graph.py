"""Graph model: the nodes and edges of a workflow.

Cycles between nodes are allowed. Validation only certifies that every
node takes part in some edge and that the graph has a way to END.
"""

from typing import Any, Self

from pydantic import BaseModel

from workflow_backbone.errors import DisconnectedNodeError, MissingTerminalError
from workflow_backbone.models.edge import Edge
from workflow_backbone.models.node import Node
from workflow_backbone.utils.wire import rename_keys

GRAPH_WIRE_KEYS = {
    "nos": "nodes",
    "arestas": "edges",
}


class Graph(BaseModel):
    """the full graph structure as assembled by the user."""

    model_config = {"extra": "forbid", "frozen": True}

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    @property
    def entry_points(self) -> list[str]:
        """Names of the nodes flagged as graph entry points."""
        return [node.name for node in self.nodes if node.is_entry]

    @property
    def output_names(self) -> list[str]:
        return [node.output.name for node in self.nodes]

    def get_node(self, name: str) -> Node | None:
        """Find a node by name."""
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def validate(self) -> None:
        """Validate nodes, then edges, then connectivity, then termination."""
        for node in self.nodes:
            node.validate(self.nodes)

        for edge in self.edges:
            edge.validate(self.nodes)

        connected: set[str] = set()
        for edge in self.edges:
            connected.add(edge.origin)
            if not edge.is_terminal:
                connected.add(edge.destination)

        for node in self.nodes:
            if node.name not in connected:
                raise DisconnectedNodeError(
                    f"node '{node.name}' is not connected to the graph",
                    node=node.name,
                )

        if not any(edge.is_terminal for edge in self.edges):
            raise MissingTerminalError("workflow must end with an edge to 'END'")

    def to_wire(self) -> dict[str, Any]:
        return {
            "nos": [node.to_wire() for node in self.nodes],
            "arestas": [edge.to_wire() for edge in self.edges],
        }

    @staticmethod
    def wire_fields(data: Any) -> Any:
        fields = rename_keys(data, GRAPH_WIRE_KEYS)
        if isinstance(fields, dict):
            if isinstance(fields.get("nodes"), list):
                fields["nodes"] = [Node.wire_fields(item) for item in fields["nodes"]]
            if isinstance(fields.get("edges"), list):
                fields["edges"] = [Edge.wire_fields(item) for item in fields["edges"]]
        return fields

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        return cls.model_validate(cls.wire_fields(data))
