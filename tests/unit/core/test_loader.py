"""Unit tests for node file loading."""

import json

import pytest

from lineage_view.core.errors import LineageError
from lineage_view.core.loader import load_nodes, parse_nodes


class TestLoadNodes:
    def test_json_mapping(self, graph_file):
        nodes = load_nodes(graph_file)
        assert [n.name for n in nodes] == ["root", "dep1", "dep2", "dep3", "dep4"]
        assert nodes[0].dependencies == ["dep1", "dep2"]

    def test_json_list(self, tmp_path):
        f = tmp_path / "graph.json"
        f.write_text(json.dumps([{"name": "a", "dependencies": ["b"]}, {"name": "b"}]))
        assert [n.name for n in load_nodes(f)] == ["a", "b"]

    def test_yaml(self, tmp_path):
        f = tmp_path / "graph.yaml"
        f.write_text(
            "nodes:\n"
            "  - name: orders\n"
            "    dependencies: [raw_orders]\n"
            "    owner: data-eng\n"
            "  - name: raw_orders\n"
        )
        nodes = load_nodes(f)
        assert nodes[0].payload == {"owner": "data-eng"}
        assert nodes[1].dependencies == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(LineageError, match="Cannot read"):
            load_nodes(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        f = tmp_path / "graph.json"
        f.write_text("{not json")
        with pytest.raises(LineageError, match="Cannot parse"):
            load_nodes(f)

    def test_wrong_shape(self):
        with pytest.raises(LineageError, match="expected a list"):
            parse_nodes({"edges": []})

    def test_record_without_name(self):
        with pytest.raises(LineageError, match="invalid node record"):
            parse_nodes([{"dependencies": []}])
