"""Tests for edge and graph validation."""

import pytest
from pydantic import ValidationError

from workflow_backbone.errors import (
    DestinationNotFoundError,
    DisconnectedNodeError,
    DuplicateNameError,
    EmptyPromptError,
    ErrorKind,
    MissingTerminalError,
    OriginNotFoundError,
)
from workflow_backbone.models.edge import TERMINAL, Edge
from workflow_backbone.models.graph import Graph
from workflow_backbone.models.node import Node, NodeOutput


def make_node(name: str, **overrides) -> Node:
    fields = {
        "name": name,
        "prompt": f"Run step {name}",
        "output": NodeOutput(name=f"{name.lower()}_out"),
    }
    fields.update(overrides)
    return Node(**fields)


@pytest.fixture
def nodes() -> list[Node]:
    return [make_node("A"), make_node("B")]


class TestEdgeValidation:
    """Test Edge.validate against a node set."""

    def test_valid_edge(self, nodes):
        Edge(origin="A", destination="B").validate(nodes)

    def test_terminal_destination_needs_no_node(self, nodes):
        edge = Edge(origin="A", destination=TERMINAL)
        assert edge.is_terminal
        edge.validate(nodes)

    def test_origin_not_found(self, nodes):
        with pytest.raises(OriginNotFoundError) as exc_info:
            Edge(origin="X", destination="B").validate(nodes)
        assert exc_info.value.kind == ErrorKind.origin_not_found
        assert exc_info.value.detail["origin"] == "X"

    def test_destination_not_found(self, nodes):
        with pytest.raises(DestinationNotFoundError) as exc_info:
            Edge(origin="A", destination="Y").validate(nodes)
        assert exc_info.value.detail["destination"] == "Y"

    def test_origin_wins_when_both_missing(self, nodes):
        with pytest.raises(OriginNotFoundError):
            Edge(origin="X", destination="Y").validate(nodes)

    def test_terminal_is_not_a_valid_origin(self, nodes):
        with pytest.raises(OriginNotFoundError):
            Edge(origin=TERMINAL, destination="A").validate(nodes)

    def test_wire_record(self):
        edge = Edge(origin="A", destination=TERMINAL)
        assert edge.to_wire() == {"origem": "A", "destino": "END"}
        assert Edge.from_wire(edge.to_wire()) == edge

    def test_wire_record_requires_both_ends(self):
        with pytest.raises(ValidationError):
            Edge.from_wire({"origem": "A"})

    def test_wire_record_rejects_field_names(self):
        with pytest.raises(ValidationError):
            Edge.from_wire({"origin": "A", "destino": TERMINAL})


class TestGraphValidation:
    """Test Graph.validate checks and their order."""

    def test_single_node_to_end(self):
        graph = Graph(nodes=[make_node("A")], edges=[Edge(origin="A", destination=TERMINAL)])
        graph.validate()

    def test_missing_terminal(self, nodes):
        graph = Graph(nodes=nodes, edges=[Edge(origin="A", destination="B")])
        with pytest.raises(MissingTerminalError) as exc_info:
            graph.validate()
        assert exc_info.value.kind == ErrorKind.missing_terminal

    def test_disconnected_node(self, nodes):
        graph = Graph(nodes=nodes, edges=[Edge(origin="A", destination=TERMINAL)])
        with pytest.raises(DisconnectedNodeError) as exc_info:
            graph.validate()
        assert exc_info.value.detail["node"] == "B"

    def test_first_disconnected_node_in_list_order(self):
        graph = Graph(
            nodes=[make_node("A"), make_node("C"), make_node("B")],
            edges=[Edge(origin="A", destination=TERMINAL)],
        )
        with pytest.raises(DisconnectedNodeError) as exc_info:
            graph.validate()
        assert exc_info.value.detail["node"] == "C"

    def test_destination_counts_as_connected(self, nodes):
        graph = Graph(
            nodes=nodes,
            edges=[Edge(origin="A", destination="B"), Edge(origin="A", destination=TERMINAL)],
        )
        graph.validate()

    def test_cycle_is_tolerated(self, nodes):
        graph = Graph(
            nodes=nodes,
            edges=[
                Edge(origin="A", destination="B"),
                Edge(origin="B", destination="A"),
                Edge(origin="A", destination=TERMINAL),
            ],
        )
        graph.validate()

    def test_self_loop_is_tolerated(self):
        graph = Graph(
            nodes=[make_node("A")],
            edges=[Edge(origin="A", destination="A"), Edge(origin="A", destination=TERMINAL)],
        )
        graph.validate()

    def test_multiple_terminal_edges(self, nodes):
        graph = Graph(
            nodes=nodes,
            edges=[Edge(origin="A", destination=TERMINAL), Edge(origin="B", destination=TERMINAL)],
        )
        graph.validate()

    def test_empty_graph_has_no_terminal(self):
        with pytest.raises(MissingTerminalError):
            Graph().validate()

    def test_node_errors_come_first(self):
        """An invalid node is reported before any edge problem."""
        graph = Graph(
            nodes=[make_node("A", prompt="")],
            edges=[Edge(origin="X", destination="Y")],
        )
        with pytest.raises(EmptyPromptError):
            graph.validate()

    def test_duplicate_names_across_graph(self):
        graph = Graph(
            nodes=[make_node("A"), make_node("A")],
            edges=[Edge(origin="A", destination=TERMINAL)],
        )
        with pytest.raises(DuplicateNameError):
            graph.validate()

    def test_edge_errors_before_connectivity(self, nodes):
        graph = Graph(nodes=nodes, edges=[Edge(origin="A", destination="Z")])
        with pytest.raises(DestinationNotFoundError):
            graph.validate()


class TestGraphQueries:
    """Test graph lookup helpers."""

    def test_entry_points(self):
        graph = Graph(nodes=[make_node("A", is_entry=True), make_node("B")])
        assert graph.entry_points == ["A"]

    def test_get_node(self, nodes):
        graph = Graph(nodes=nodes)
        assert graph.get_node("B") is nodes[1]
        assert graph.get_node("missing") is None

    def test_output_names(self, nodes):
        assert Graph(nodes=nodes).output_names == ["a_out", "b_out"]

    def test_wire_record(self, nodes):
        graph = Graph(nodes=nodes, edges=[Edge(origin="A", destination="B")])
        record = graph.to_wire()
        assert [n["nome"] for n in record["nos"]] == ["A", "B"]
        assert record["arestas"] == [{"origem": "A", "destino": "B"}]
        assert Graph.from_wire(record) == graph

    def test_later_list_edits_do_not_reach_the_graph(self, nodes):
        edges = [Edge(origin="A", destination=TERMINAL)]
        graph = Graph(nodes=nodes, edges=edges)
        nodes.append(make_node("C"))
        edges.clear()
        assert graph.get_node("C") is None
        assert len(graph.edges) == 1
