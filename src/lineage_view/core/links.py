"""
Link materialization backed by rustworkx.

Each dependency entry becomes one Edge from the declaring node to the node
it names. The edges are mirrored into a rustworkx multigraph, which answers
the degree and cycle queries the layout needs.
"""

import logging
from typing import Dict, Iterator, List

import rustworkx as rx

from .errors import UnresolvedReferenceError
from .graph import NodeMap
from .types import Edge

logger = logging.getLogger(__name__)


class LinkSet:
    """
    Ordered collection of resolved edges.

    Edges keep node order, then dependency order. Parallel edges are kept:
    a node listing the same dependency twice yields two edges.
    """

    def __init__(self, node_map: NodeMap):
        self._graph = rx.PyDiGraph(multigraph=True)
        self._name_to_idx: Dict[str, int] = {}
        self._edges: List[Edge] = []
        for name, layout_node in node_map.items():
            self._name_to_idx[name] = self._graph.add_node(layout_node)

    def add(self, edge: Edge) -> None:
        u = self._name_to_idx[edge.source.name]
        v = self._name_to_idx[edge.target.name]
        self._graph.add_edge(u, v, edge)
        self._edges.append(edge)

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges)

    def degree(self, name: str) -> int:
        """Number of edge endpoints on the node; a self-loop counts twice."""
        idx = self._name_to_idx.get(name)
        if idx is None:
            return 0
        return self._graph.in_degree(idx) + self._graph.out_degree(idx)

    def has_cycle(self) -> bool:
        return not rx.is_directed_acyclic_graph(self._graph)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)


def build_links(node_map: NodeMap) -> LinkSet:
    """
    Resolve every dependency entry into an Edge.

    Raises:
        UnresolvedReferenceError: If a dependency names a missing node.
    """
    links = LinkSet(node_map)
    for layout_node in node_map.values():
        for dep in layout_node.dependencies:
            target = node_map.get(dep)
            if target is None:
                raise UnresolvedReferenceError(dep, referenced_by=layout_node.name)
            links.add(Edge(source=layout_node, target=target))

    if links.has_cycle():
        logger.warning("Dependency graph contains a cycle; depths of its members are approximate")
    logger.debug(f"Built {len(links)} links")
    return links
