"""Workflow aggregate root: attached documents, graph and final result format.

``Workflow.validate`` certifies the whole aggregate before it is persisted
or sent for execution; ``to_json`` produces the document the execution
engine consumes. Serializing a workflow that failed validation is the
caller's mistake: ``to_json`` does not validate again.
"""

import json
from typing import Annotated, Any, Self

from pydantic import BaseModel, Field, model_validator

from workflow_backbone.errors import (
    UnboundPromptVariableError,
    UnknownDocumentReferenceError,
)
from workflow_backbone.models.final_result import FinalResultFormat
from workflow_backbone.models.graph import Graph
from workflow_backbone.utils.placeholders import find_unbound_variables
from workflow_backbone.utils.wire import field_name, rename_each

WORKFLOW_WIRE_KEYS = {
    "documentos_anexados": "attached_documents",
    "grafo": "graph",
    "resultado_final": "final_result_format",
}

DOCUMENT_WIRE_KEYS = {
    "chave": "key",
    "descricao": "description",
    "uuid_unico": "single_id",
    "uuids_lista": "id_list",
}


class AttachedDocument(BaseModel):
    """A document supplied with the workflow, referenced by key from node inputs."""

    model_config = {"extra": "forbid", "frozen": True}

    key: str = Field(min_length=1)
    description: str = Field(min_length=1)
    single_id: str | None = None
    id_list: Annotated[tuple[str, ...], Field(min_length=1)] | None = None

    @model_validator(mode="after")
    def validate_identifiers(self) -> Self:
        """A document is either a single file or a list of files, not both."""
        if self.single_id is not None and self.id_list is not None:
            raise ValueError(
                f"document '{self.key}' must have either single_id or id_list, not both"
            )
        return self

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {"chave": self.key, "descricao": self.description}
        if self.single_id is not None:
            data["uuid_unico"] = self.single_id
        if self.id_list is not None:
            data["uuids_lista"] = list(self.id_list)
        return data


class Workflow(BaseModel):
    """A complete workflow ready to be certified and exported."""

    model_config = {"extra": "forbid", "frozen": True}

    attached_documents: tuple[AttachedDocument, ...] = ()
    graph: Graph
    final_result_format: FinalResultFormat | None = None

    @property
    def document_keys(self) -> list[str]:
        return [document.key for document in self.attached_documents]

    def validate(self) -> None:
        """Validate the whole aggregate, raising the first violation found.

        Order: graph, final result format, document references of every
        node, then prompt variable bindings of every node.
        """
        self.graph.validate()

        if self.final_result_format is not None:
            self.final_result_format.validate(self.graph.nodes)

        keys = set(self.document_keys)
        for node in self.graph.nodes:
            for node_input in node.document_inputs:
                if node_input.source_document_key not in keys:
                    raise UnknownDocumentReferenceError(
                        f"node '{node.name}': document "
                        f"'{node_input.source_document_key}' not found in attached documents",
                        node=node.name,
                        document_key=node_input.source_document_key,
                    )

        for node in self.graph.nodes:
            missing = find_unbound_variables(node.prompt, node.prompt_variables)
            if missing:
                raise UnboundPromptVariableError(
                    f"node '{node.name}': prompt variables without a matching "
                    f"input: {', '.join(missing)}",
                    node=node.name,
                    variables=missing,
                )

    def to_json(self) -> dict[str, Any]:
        """Convert to the wire format expected by the execution engine."""
        data: dict[str, Any] = {
            "documentos_anexados": [document.to_wire() for document in self.attached_documents],
            "grafo": self.graph.to_wire(),
        }
        if self.final_result_format is not None:
            data["resultado_final"] = self.final_result_format.to_wire()
        return data

    def to_json_string(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_json(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: Any) -> Self:
        """Build a workflow from a wire document.

        Accepts the current ``resultado_final`` block as well as the older
        ``formato_resultado_final`` one. Shape errors raise pydantic's
        ValidationError; the result is not validated.
        """
        if not isinstance(data, dict):
            return cls.model_validate(data)

        fields: dict[str, Any] = {}
        for key, value in data.items():
            if key == "documentos_anexados":
                fields["attached_documents"] = rename_each(value, DOCUMENT_WIRE_KEYS)
            elif key == "grafo":
                fields["graph"] = Graph.wire_fields(value)
            elif key == "resultado_final":
                fields["final_result_format"] = FinalResultFormat.wire_fields(value)
            elif key == "formato_resultado_final":
                # the current block wins when both are present
                fields.setdefault(
                    "final_result_format", FinalResultFormat.legacy_wire_fields(value)
                )
            else:
                fields[field_name(key, WORKFLOW_WIRE_KEYS)] = value
        return cls.model_validate(fields)

    @classmethod
    def from_json_string(cls, text: str | bytes) -> Self:
        return cls.from_json(json.loads(text))
