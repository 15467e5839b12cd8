"""Edge model: a directed connection between two nodes, or a node and END."""

from collections.abc import Sequence
from typing import Any, Self

from pydantic import BaseModel

from workflow_backbone.errors import DestinationNotFoundError, OriginNotFoundError
from workflow_backbone.models.node import Node
from workflow_backbone.utils.wire import rename_keys

# reserved destination marking workflow completion, never a real node
TERMINAL = "END"

EDGE_WIRE_KEYS = {
    "origem": "origin",
    "destino": "destination",
}


class Edge(BaseModel):
    """a directed edge between two node names."""

    model_config = {"extra": "forbid", "frozen": True}

    origin: str
    destination: str

    @property
    def is_terminal(self) -> bool:
        return self.destination == TERMINAL

    def validate(self, nodes: Sequence[Node]) -> None:
        """Check both endpoints against ``nodes``; the origin is checked first."""
        names = {node.name for node in nodes}
        if self.origin not in names:
            raise OriginNotFoundError(
                f"edge: origin node '{self.origin}' not found",
                origin=self.origin,
                destination=self.destination,
            )
        if not self.is_terminal and self.destination not in names:
            raise DestinationNotFoundError(
                f"edge: destination node '{self.destination}' not found",
                origin=self.origin,
                destination=self.destination,
            )

    def to_wire(self) -> dict[str, Any]:
        return {"origem": self.origin, "destino": self.destination}

    @staticmethod
    def wire_fields(data: Any) -> Any:
        return rename_keys(data, EDGE_WIRE_KEYS)

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        return cls.model_validate(cls.wire_fields(data))
