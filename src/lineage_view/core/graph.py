"""
Graph indexing.

Turns the caller's node list into the name-keyed map every later stage
works on. The map keeps input order so layouts are reproducible.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Union

from .errors import NameCollisionError
from .types import LayoutNode, Node

logger = logging.getLogger(__name__)

NodeInput = Union[Node, Mapping[str, Any]]

NodeMap = Dict[str, LayoutNode]


def to_node(raw: NodeInput) -> Node:
    """Validate a raw record into a Node. Node instances pass through."""
    if isinstance(raw, Node):
        return raw
    return Node.model_validate(raw)


def index_nodes(nodes: Iterable[NodeInput]) -> NodeMap:
    """
    Build the name -> LayoutNode map.

    Every LayoutNode starts with an unassigned depth. `in_degree` counts the
    dependency entries of other nodes that name the node; a self reference
    does not count.

    Raises:
        NameCollisionError: If two nodes share a name.
    """
    node_map: NodeMap = {}
    for position, raw in enumerate(nodes):
        node = to_node(raw)
        if node.name in node_map:
            raise NameCollisionError(node.name)
        node_map[node.name] = LayoutNode(node=node, index=position)

    references = Counter(
        dep
        for layout_node in node_map.values()
        for dep in layout_node.dependencies
        if dep != layout_node.name
    )
    for name, layout_node in node_map.items():
        layout_node.in_degree = references.get(name, 0)

    logger.debug(f"Indexed {len(node_map)} nodes, {sum(references.values())} dependency references")
    return node_map


def roots(node_map: NodeMap) -> List[LayoutNode]:
    """Nodes no other node depends on, in input order."""
    return [layout_node for layout_node in node_map.values() if layout_node.is_root]
