"""Shared fixtures for lineage_view tests."""

import json

import pytest

from lineage_view import Viewport


@pytest.fixture
def lineage_nodes():
    """Diamond feeding a chain: root -> dep1/dep2 -> dep3 -> dep4."""
    return [
        {"name": "root", "dependencies": ["dep1", "dep2"]},
        {"name": "dep1", "dependencies": ["dep3"]},
        {"name": "dep2", "dependencies": ["dep3"]},
        {"name": "dep3", "dependencies": ["dep4"]},
        {"name": "dep4", "dependencies": []},
    ]


@pytest.fixture
def viewport():
    return Viewport(1200, 800)


@pytest.fixture
def graph_file(tmp_path, lineage_nodes):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps({"nodes": lineage_nodes}))
    return path
