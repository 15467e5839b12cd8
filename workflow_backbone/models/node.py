"""Node model: a single prompt-bearing step of a workflow graph.

Construction is the strict boundary: a malformed shape (unknown source,
missing reference field, temperature out of range, extra keys) raises
pydantic's ValidationError. Emptiness and cross-node rules are checked
later by ``Node.validate`` against the sibling nodes of a graph.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Annotated, Any, Literal, Self, Union

from pydantic import BaseModel, Field, TypeAdapter

from workflow_backbone.errors import (
    DuplicateNameError,
    EmptyNameError,
    EmptyOutputNameError,
    EmptyPromptError,
    MultipleParallelInputsError,
)
from workflow_backbone.utils.wire import rename_each, rename_keys


# input sources, as they appear on the wire
ATTACHED_DOCUMENT = "documento_anexado"
PREVIOUS_NODE_RESULT = "resultado_no_anterior"

INPUT_WIRE_KEYS = {
    "variavel_prompt": "prompt_variable",
    "origem": "source",
    "chave_documento_origem": "source_document_key",
    "nome_no_origem": "source_node_name",
    "executar_em_paralelo": "run_in_parallel",
}

OUTPUT_WIRE_KEYS = {
    "nome": "name",
    "formato": "format",
}

NODE_WIRE_KEYS = {
    "nome": "name",
    "prompt": "prompt",
    "entrada_grafo": "is_entry",
    "entradas": "inputs",
    "saida": "output",
    "modelo_llm": "llm_model",
    "temperatura": "temperature",
    "ferramentas": "tools",
}


class OutputFormat(str, Enum):
    """Formats a node can produce."""

    markdown = "markdown"
    json = "json"


class DocumentInput(BaseModel):
    """Prompt variable filled from an attached document."""

    model_config = {"extra": "forbid", "frozen": True}

    prompt_variable: str
    source: Literal["documento_anexado"] = ATTACHED_DOCUMENT
    source_document_key: str = Field(min_length=1)
    run_in_parallel: bool = False

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "variavel_prompt": self.prompt_variable,
            "origem": self.source,
            "chave_documento_origem": self.source_document_key,
        }
        if self.run_in_parallel:
            data["executar_em_paralelo"] = True
        return data


class PreviousResultInput(BaseModel):
    """Prompt variable filled from the output of another node."""

    model_config = {"extra": "forbid", "frozen": True}

    prompt_variable: str
    source: Literal["resultado_no_anterior"] = PREVIOUS_NODE_RESULT
    source_node_name: str = Field(min_length=1)
    run_in_parallel: bool = False

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "variavel_prompt": self.prompt_variable,
            "origem": self.source,
            "nome_no_origem": self.source_node_name,
        }
        if self.run_in_parallel:
            data["executar_em_paralelo"] = True
        return data


NodeInput = Annotated[
    Union[DocumentInput, PreviousResultInput],
    Field(discriminator="source"),
]

_node_input_adapter = TypeAdapter(NodeInput)


def parse_node_input(data: Any) -> DocumentInput | PreviousResultInput:
    """Build the matching input variant from a plain form record."""
    return _node_input_adapter.validate_python(data)


class NodeOutput(BaseModel):
    """The named result a node produces."""

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    format: OutputFormat | None = None

    def to_wire(self) -> dict[str, Any]:
        data: dict[str, Any] = {"nome": self.name}
        if self.format is not None:
            data["formato"] = self.format.value
        return data


class Node(BaseModel):
    """A workflow step: prompt template, declared inputs and output."""

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    prompt: str
    is_entry: bool = False
    inputs: tuple[NodeInput, ...] = ()
    output: NodeOutput

    # passed through to the execution engine, never inspected here
    llm_model: str | None = None
    temperature: float | None = Field(default=None, ge=0, le=2)
    tools: tuple[str, ...] = ()

    @property
    def prompt_variables(self) -> list[str]:
        """Prompt variables declared by this node's inputs."""
        return [node_input.prompt_variable for node_input in self.inputs]

    @property
    def document_inputs(self) -> list[DocumentInput]:
        return [i for i in self.inputs if isinstance(i, DocumentInput)]

    def validate(self, existing_nodes: Sequence["Node"]) -> None:
        """Check this node against the nodes of its graph.

        Raises the first violation found, in order: empty name, empty prompt,
        empty output name, duplicate name, more than one parallel input.
        ``existing_nodes`` may include this node; it is skipped by identity.
        """
        if not self.name.strip():
            raise EmptyNameError("node name must not be empty", node=self.name)
        if not self.prompt.strip():
            raise EmptyPromptError(
                f"node '{self.name}': prompt must not be empty", node=self.name
            )
        if not self.output.name.strip():
            raise EmptyOutputNameError(
                f"node '{self.name}': output name must not be empty", node=self.name
            )

        for other in existing_nodes:
            if other is not self and other.name == self.name:
                raise DuplicateNameError(
                    f"node name '{self.name}' is already in use", node=self.name
                )

        parallel = [i.prompt_variable for i in self.inputs if i.run_in_parallel]
        if len(parallel) > 1:
            raise MultipleParallelInputsError(
                f"node '{self.name}': only one input may run in parallel, "
                f"found {len(parallel)}: {', '.join(parallel)}",
                node=self.name,
                prompt_variables=parallel,
            )

    def to_wire(self) -> dict[str, Any]:
        """Wire record; optional fields are left out when unset or empty."""
        data: dict[str, Any] = {"nome": self.name}
        if self.llm_model is not None:
            data["modelo_llm"] = self.llm_model
        if self.temperature is not None:
            data["temperatura"] = self.temperature
        if self.tools:
            data["ferramentas"] = list(self.tools)
        data["prompt"] = self.prompt
        data["entrada_grafo"] = self.is_entry
        if self.inputs:
            data["entradas"] = [node_input.to_wire() for node_input in self.inputs]
        data["saida"] = self.output.to_wire()
        return data

    @staticmethod
    def wire_fields(data: Any) -> Any:
        """Translate a wire record into constructor fields, without validating."""
        fields = rename_keys(data, NODE_WIRE_KEYS)
        if isinstance(fields, dict):
            if "inputs" in fields:
                fields["inputs"] = rename_each(fields["inputs"], INPUT_WIRE_KEYS)
            if "output" in fields:
                fields["output"] = rename_keys(fields["output"], OUTPUT_WIRE_KEYS)
        return fields

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        """Build a node from its wire record."""
        return cls.model_validate(cls.wire_fields(data))
