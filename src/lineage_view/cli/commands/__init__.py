"""
CLI Commands Package.

Each command is implemented in its own module for maintainability.
"""

from . import depths
from . import layout
from . import render

__all__ = [
    "depths",
    "layout",
    "render",
]
