"""
Exceptions raised while building a lineage layout.

Malformed input fails fast: a graph with a dangling reference or a
duplicated name is never laid out partially.
"""

from typing import Optional


class LineageError(Exception):
    """Base class for all lineage view errors."""


class UnresolvedReferenceError(LineageError, ReferenceError):
    """A dependency names a node that is not part of the graph."""

    def __init__(self, name: str, referenced_by: Optional[str] = None):
        self.name = name
        self.referenced_by = referenced_by
        if referenced_by:
            message = f"Node {name} not found (dependency of {referenced_by})"
        else:
            message = f"Node {name} not found"
        super().__init__(message)


class NameCollisionError(LineageError, ReferenceError):
    """Two input nodes share the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate node name: {name}")


class ConfigError(LineageError):
    """Configuration file could not be read or validated."""
