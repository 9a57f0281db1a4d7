"""
Depth assignment.

A node's depth is the length of the longest dependency chain from any root
down to it, so a node reached by a short and a long chain sits past the
end of the long one instead of overlapping the short one.

Traversal uses an explicit work stack. Each entry carries the names on its
own path; a dependency already on that path is not pushed again, which
bounds the walk on cyclic input. Depths of nodes inside a cycle are then a
lower bound rather than an exact layering.
"""

import logging
from typing import List, Tuple

from .errors import UnresolvedReferenceError
from .graph import NodeMap, roots
from .types import UNASSIGNED_DEPTH, LayoutNode

logger = logging.getLogger(__name__)


def assign_depths(node_map: NodeMap) -> NodeMap:
    """
    Annotate every LayoutNode with its longest-path depth.

    Roots get depth 0. Nodes unreachable from any root (members of a
    rootless cycle) are walked from their first member in input order.
    Running twice on the same map gives the same depths.

    Raises:
        UnresolvedReferenceError: If a dependency names a missing node.
    """
    for layout_node in node_map.values():
        layout_node.depth = UNASSIGNED_DEPTH

    _walk(node_map, roots(node_map))

    orphans = [n for n in node_map.values() if n.depth == UNASSIGNED_DEPTH]
    if orphans:
        logger.warning(
            f"{len(orphans)} nodes are only reachable through a dependency cycle; "
            "their depths are approximate"
        )
    while orphans:
        _walk(node_map, orphans[:1])
        orphans = [n for n in orphans if n.depth == UNASSIGNED_DEPTH]

    if node_map:
        deepest = max(n.depth for n in node_map.values())
        logger.debug(f"Assigned depths to {len(node_map)} nodes, max depth {deepest}")
    return node_map


def _walk(node_map: NodeMap, seeds: List[LayoutNode]) -> None:
    stack: List[Tuple[LayoutNode, List[str]]] = [(seed, []) for seed in seeds]

    while stack:
        layout_node, path = stack.pop()
        candidate = len(path)
        if layout_node.depth != UNASSIGNED_DEPTH and candidate <= layout_node.depth:
            continue
        layout_node.depth = candidate

        next_path = path + [layout_node.name]
        for dep in layout_node.dependencies:
            dep_node = node_map.get(dep)
            if dep_node is None:
                raise UnresolvedReferenceError(dep, referenced_by=layout_node.name)
            if dep in next_path:
                continue
            stack.append((dep_node, next_path))
