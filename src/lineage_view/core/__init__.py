"""
Core modules for the lineage view.

This package contains the graph building blocks:
- types: Data structures (Node, LayoutNode, Edge, Bounds)
- graph: Name-keyed node indexing
- depth: Longest-path depth assignment
- links: Resolved edges backed by rustworkx
- loader: Reading node lists from files
"""

from .depth import assign_depths
from .errors import ConfigError, LineageError, NameCollisionError, UnresolvedReferenceError
from .graph import NodeMap, index_nodes, roots
from .links import LinkSet, build_links
from .loader import load_nodes, parse_nodes
from .types import UNASSIGNED_DEPTH, Bounds, Edge, LayoutNode, Node, Viewport

__all__ = [
    # Types
    "Node", "LayoutNode", "Edge", "Bounds", "Viewport", "UNASSIGNED_DEPTH",
    # Errors
    "LineageError", "UnresolvedReferenceError", "NameCollisionError", "ConfigError",
    # Graph
    "NodeMap", "index_nodes", "roots", "assign_depths", "LinkSet", "build_links",
    # Loading
    "load_nodes", "parse_nodes",
]
