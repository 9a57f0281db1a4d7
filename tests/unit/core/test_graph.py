"""
Unit tests for graph indexing and link building.
"""

import pytest

from lineage_view.core.depth import assign_depths
from lineage_view.core.errors import NameCollisionError, UnresolvedReferenceError
from lineage_view.core.graph import index_nodes, roots, to_node
from lineage_view.core.links import build_links
from lineage_view.core.types import UNASSIGNED_DEPTH, Node


class TestIndexNodes:

    def test_map_keeps_input_order(self, lineage_nodes):
        node_map = index_nodes(lineage_nodes)
        assert list(node_map) == ["root", "dep1", "dep2", "dep3", "dep4"]
        assert [n.index for n in node_map.values()] == [0, 1, 2, 3, 4]

    def test_in_degree_counts_references(self, lineage_nodes):
        node_map = index_nodes(lineage_nodes)
        assert node_map["root"].in_degree == 0
        assert node_map["dep1"].in_degree == 1
        assert node_map["dep3"].in_degree == 2
        assert node_map["dep4"].in_degree == 1

    def test_depth_starts_unassigned(self, lineage_nodes):
        node_map = index_nodes(lineage_nodes)
        assert all(n.depth == UNASSIGNED_DEPTH for n in node_map.values())
        assert all(n.x is None and n.y is None for n in node_map.values())

    def test_roots(self, lineage_nodes):
        node_map = index_nodes(lineage_nodes)
        assert [n.name for n in roots(node_map)] == ["root"]

    def test_self_reference_does_not_count(self, caplog):
        node_map = index_nodes([{"name": "a", "dependencies": ["a", "b"]}, {"name": "b"}])
        assert node_map["a"].in_degree == 0
        assert node_map["b"].in_degree == 1
        assert [n.name for n in roots(node_map)] == ["a"]

        assign_depths(node_map)
        assert node_map["a"].depth == 0
        assert node_map["b"].depth == 1
        assert "dependency cycle" not in caplog.text

    def test_duplicate_name_rejected(self):
        with pytest.raises(NameCollisionError) as exc:
            index_nodes([{"name": "a"}, {"name": "b"}, {"name": "a"}])
        assert exc.value.name == "a"
        assert "Duplicate node name: a" in str(exc.value)

    def test_empty_input(self):
        assert index_nodes([]) == {}

    def test_payload_passes_through(self):
        node_map = index_nodes([{"name": "orders", "owner": "data-eng", "rows": 42}])
        node = node_map["orders"].node
        assert node.payload == {"owner": "data-eng", "rows": 42}
        assert node.fields() == {"name": "orders", "dependencies": [], "owner": "data-eng", "rows": 42}

    def test_node_instances_are_reused(self):
        node = Node(name="a")
        assert to_node(node) is node
        assert index_nodes([node])["a"].node is node


class TestBuildLinks:

    def test_one_edge_per_dependency_entry(self, lineage_nodes):
        links = build_links(index_nodes(lineage_nodes))
        assert len(links) == 5
        assert [edge.key for edge in links] == [
            ("root", "dep1"),
            ("root", "dep2"),
            ("dep1", "dep3"),
            ("dep2", "dep3"),
            ("dep3", "dep4"),
        ]

    def test_edges_reference_layout_nodes(self, lineage_nodes):
        node_map = index_nodes(lineage_nodes)
        edge = build_links(node_map).edges[0]
        assert edge.source is node_map["root"]
        assert edge.target is node_map["dep1"]

    def test_degree(self, lineage_nodes):
        links = build_links(index_nodes(lineage_nodes))
        assert links.degree("dep3") == 3
        assert links.degree("root") == 2
        assert links.degree("missing") == 0

    def test_parallel_edges_kept(self):
        links = build_links(index_nodes([{"name": "a", "dependencies": ["b", "b"]}, {"name": "b"}]))
        assert len(links) == 2
        assert links.degree("b") == 2

    def test_unresolved_dependency_is_fatal(self):
        node_map = index_nodes([{"name": "a", "dependencies": ["ghost"]}])
        with pytest.raises(UnresolvedReferenceError) as exc:
            build_links(node_map)
        assert exc.value.name == "ghost"
        assert exc.value.referenced_by == "a"
        assert isinstance(exc.value, ReferenceError)

    def test_cycle_detection(self, lineage_nodes):
        assert not build_links(index_nodes(lineage_nodes)).has_cycle()

        cyclic = [{"name": "a", "dependencies": ["b"]}, {"name": "b", "dependencies": ["a"]}]
        assert build_links(index_nodes(cyclic)).has_cycle()
