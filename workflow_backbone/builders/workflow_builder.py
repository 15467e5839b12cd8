"""Fluent builders for assembling a workflow step by step.

    workflow = (
        WorkflowBuilder()
        .add_document("report", "Audit report", single_id="550e8400-...")
        .start_node("Summarize", is_entry=True)
            .set_prompt("Summarize {report}")
            .add_document_input("report", "report")
            .end_node()
        .build()
    )

``build`` connects every node without outgoing edges to END before
validating, so a linear chain only needs its inner edges.
"""

from __future__ import annotations

from logging import getLogger

from workflow_backbone.errors import BuilderStateError
from workflow_backbone.models.edge import TERMINAL, Edge
from workflow_backbone.models.final_result import FinalResultFormat, OutputCombination
from workflow_backbone.models.graph import Graph
from workflow_backbone.models.node import (
    DocumentInput,
    Node,
    NodeInput,
    NodeOutput,
    OutputFormat,
    PreviousResultInput,
)
from workflow_backbone.models.workflow import AttachedDocument, Workflow

logger = getLogger(__name__)


class NodeBuilder:
    """Collects the settings of one node."""

    def __init__(self, name: str, is_entry: bool, workflow_builder: WorkflowBuilder) -> None:
        self._workflow_builder = workflow_builder
        self.name = name
        self.is_entry = is_entry
        self.prompt = ""
        self.output = NodeOutput(name=f"{name.lower()}_output")
        self.inputs: list[NodeInput] = []
        self.llm_model: str | None = None
        self.temperature: float | None = None
        self.tools: list[str] = []

    def set_prompt(self, prompt: str) -> NodeBuilder:
        self.prompt = prompt
        return self

    def set_llm_model(self, model: str) -> NodeBuilder:
        self.llm_model = model
        return self

    def set_temperature(self, temperature: float) -> NodeBuilder:
        if temperature < 0 or temperature > 2:
            raise ValueError("temperature must be between 0 and 2")
        self.temperature = temperature
        return self

    def set_tools(self, tools: list[str]) -> NodeBuilder:
        self.tools = list(tools)
        return self

    def add_tool(self, tool: str) -> NodeBuilder:
        self.tools.append(tool)
        return self

    def set_output(self, name: str, format: OutputFormat | str | None = None) -> NodeBuilder:
        self.output = NodeOutput(name=name, format=format)
        return self

    def add_document_input(
        self,
        prompt_variable: str,
        document_key: str,
        run_in_parallel: bool = False,
    ) -> NodeBuilder:
        """Fill ``prompt_variable`` from the attached document ``document_key``."""
        self.inputs.append(DocumentInput(
            prompt_variable=prompt_variable,
            source_document_key=document_key,
            run_in_parallel=run_in_parallel,
        ))
        return self

    def add_previous_output_input(
        self,
        prompt_variable: str,
        node_name: str,
        run_in_parallel: bool = False,
    ) -> NodeBuilder:
        """Fill ``prompt_variable`` from the result of node ``node_name``."""
        self.inputs.append(PreviousResultInput(
            prompt_variable=prompt_variable,
            source_node_name=node_name,
            run_in_parallel=run_in_parallel,
        ))
        return self

    def build(self) -> Node:
        """Create the node and check it against the nodes already added."""
        node = Node(
            name=self.name,
            prompt=self.prompt,
            is_entry=self.is_entry,
            inputs=self.inputs,
            output=self.output,
            llm_model=self.llm_model,
            temperature=self.temperature,
            tools=self.tools,
        )
        node.validate([*self._workflow_builder.nodes, node])
        return node

    def end_node(self) -> WorkflowBuilder:
        return self._workflow_builder.end_node()


class FinalResultBuilder:
    """Collects the output declarations of a workflow."""

    def __init__(self, workflow_builder: WorkflowBuilder) -> None:
        self._workflow_builder = workflow_builder
        self.combinations: list[OutputCombination] = []
        self.individual_outputs: list[str] = []

    def add_individual_output(self, name: str) -> FinalResultBuilder:
        """Deliver a node output unchanged."""
        self.individual_outputs.append(name)
        return self

    def add_combination(
        self,
        output_name: str,
        combined_from: list[str],
        keep_originals: bool = False,
        template: str | None = None,
    ) -> FinalResultBuilder:
        """Deliver several node outputs merged under ``output_name``."""
        self.combinations.append(OutputCombination(
            output_name=output_name,
            combined_from=combined_from,
            keep_originals=keep_originals,
            template=template,
        ))
        return self

    def build(self) -> FinalResultFormat:
        return FinalResultFormat(
            combinations=self.combinations,
            individual_outputs=self.individual_outputs,
        )

    def end_final_result(self) -> WorkflowBuilder:
        return self._workflow_builder.end_final_result()


class WorkflowBuilder:
    """Assembles documents, nodes, edges and the final result into a Workflow."""

    def __init__(self) -> None:
        self.documents: list[AttachedDocument] = []
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.final_result_format: FinalResultFormat | None = None

        self._current_node: NodeBuilder | None = None
        self._current_final_result: FinalResultBuilder | None = None

    # ── documents ──

    def add_document(
        self,
        key: str,
        description: str,
        single_id: str | None = None,
        id_list: list[str] | None = None,
    ) -> WorkflowBuilder:
        self.documents.append(AttachedDocument(
            key=key,
            description=description,
            single_id=single_id,
            id_list=id_list,
        ))
        return self

    # ── nodes ──

    def start_node(self, name: str, is_entry: bool = False) -> NodeBuilder:
        if self._current_node is not None:
            raise BuilderStateError(
                f"node '{self._current_node.name}' is still under construction, "
                f"finish it before starting another"
            )
        self._current_node = NodeBuilder(name, is_entry, self)
        return self._current_node

    def add_node(self, node: Node) -> WorkflowBuilder:
        self.nodes.append(node)
        logger.debug(f"Node added: {node.name}")
        return self

    def end_node(self) -> WorkflowBuilder:
        if self._current_node is None:
            raise BuilderStateError("no node under construction to finish")
        node = self._current_node.build()
        self._current_node = None
        return self.add_node(node)

    # ── edges ──

    def connect(self, origin: str, destination: str) -> WorkflowBuilder:
        self.edges.append(Edge(origin=origin, destination=destination))
        return self

    def connect_to_end(self, origin: str) -> WorkflowBuilder:
        return self.connect(origin, TERMINAL)

    # ── final result ──

    def start_final_result(self) -> FinalResultBuilder:
        if self._current_final_result is not None:
            raise BuilderStateError("a final result is already under construction")
        self._current_final_result = FinalResultBuilder(self)
        return self._current_final_result

    def set_final_result(self, final_result_format: FinalResultFormat) -> WorkflowBuilder:
        self.final_result_format = final_result_format
        return self

    def end_final_result(self) -> WorkflowBuilder:
        if self._current_final_result is None:
            raise BuilderStateError("no final result under construction to finish")
        final_result_format = self._current_final_result.build()
        self._current_final_result = None
        return self.set_final_result(final_result_format)

    # ── queries ──

    def get_node_names(self) -> list[str]:
        return [node.name for node in self.nodes]

    def get_final_nodes(self) -> list[str]:
        """Names of nodes that are not the origin of any edge."""
        origins = {edge.origin for edge in self.edges}
        return [node.name for node in self.nodes if node.name not in origins]

    def auto_connect_final_nodes(self) -> WorkflowBuilder:
        """Add an edge to END for every node without outgoing edges."""
        for name in self.get_final_nodes():
            logger.debug(f"Connecting final node to {TERMINAL}: {name}")
            self.connect_to_end(name)
        return self

    # ── build ──

    def build(self) -> Workflow:
        """Finish pending builders, close the graph and validate the workflow."""
        if self._current_node is not None:
            self.end_node()
        if self._current_final_result is not None:
            self.end_final_result()

        self.auto_connect_final_nodes()

        workflow = Workflow(
            attached_documents=self.documents,
            graph=Graph(nodes=self.nodes, edges=self.edges),
            final_result_format=self.final_result_format,
        )
        workflow.validate()
        logger.info(
            f"Workflow built: {len(self.nodes)} nodes, {len(self.edges)} edges"
        )
        return workflow

    def to_json_string(self, indent: int | None = 2) -> str:
        return self.build().to_json_string(indent=indent)
