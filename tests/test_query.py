"""Tests for selection and adjacency lookups."""

from forcegraph import query
from forcegraph.model import Link, Node


class TestSelect:
    def test_node_with_connections(self, loaded):
        selection = query.select(loaded, "a")
        assert selection
        assert selection.node.label == "Alpha"
        assert [link.target for link in selection.links] == ["b", "a"]
        assert [n.id for n in selection.neighbours] == ["b", "c"]

    def test_unknown_node_gives_empty_selection(self, loaded):
        selection = query.select(loaded, "missing")
        assert not selection
        assert selection.connections == ()

    def test_isolated_node(self, loaded):
        selection = query.select(loaded, "d")
        assert selection.node.id == "d"
        assert selection.links == ()

    def test_self_link_neighbour_is_the_node(self, engine):
        engine.load([Node("a"), Node("b")], [Link("a", "a"), Link("a", "b")])
        selection = query.select(engine, "a")
        assert [n.id for n in selection.neighbours] == ["a", "b"]

    def test_records_are_copies(self, loaded):
        record = query.select(loaded, "a").node
        loaded.run(max_ticks=5)
        assert (record.x, record.y) != (loaded.nodes["a"].x, loaded.nodes["a"].y)


class TestAdjacency:
    def test_incoming_and_outgoing(self, loaded):
        assert query.outgoing(loaded, "b") == ["c"]
        assert query.incoming(loaded, "b") == ["a"]
        assert query.incoming(loaded, "missing") == []

    def test_neighbours_are_distinct(self, engine):
        engine.load([Node("a"), Node("b"), Node("c")],
                    [Link("a", "b"), Link("b", "a"), Link("a", "c"), Link("a", "b")])
        assert query.neighbours(engine, "a") == ["b", "c"]
        assert len(query.incident_links(engine, "a")) == 4

    def test_sample_hub(self, sample_engine):
        assert sorted(query.neighbours(sample_engine, "8")) == ["1", "4", "6"]
        assert query.incoming(sample_engine, "8") == ["1", "6", "4"]
