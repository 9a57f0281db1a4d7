"""
Per-node renderers.

A renderer turns a Node into the markup shown inside its box. Callers pick
one per view: any object with `render(node) -> str`, or a plain function
wrapped with `as_renderer`.
"""

import html
from typing import Callable, Protocol, Union, runtime_checkable

from ..core.types import Node


@runtime_checkable
class NodeRenderer(Protocol):
    def render(self, node: Node) -> str:
        ...


class NameRenderer:
    """Default renderer: the node's name, escaped."""

    def render(self, node: Node) -> str:
        return html.escape(node.name)


class CallableRenderer:
    """Adapts a `node -> markup` function to the NodeRenderer protocol."""

    def __init__(self, func: Callable[[Node], str]):
        self.func = func

    def render(self, node: Node) -> str:
        return str(self.func(node))


def as_renderer(obj: Union[NodeRenderer, Callable[[Node], str], None]) -> NodeRenderer:
    if obj is None:
        return NameRenderer()
    if isinstance(obj, NodeRenderer):
        return obj
    if callable(obj):
        return CallableRenderer(obj)
    raise TypeError(f"Expected a NodeRenderer or a callable, got {type(obj).__name__}")
