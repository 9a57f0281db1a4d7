"""
Node list loading from JSON or YAML files.

Accepted layouts:

    [{"name": "root", "dependencies": ["dep1"]}, ...]
    {"nodes": [{"name": "root", "dependencies": ["dep1"]}, ...]}
"""

import json
import logging
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import ValidationError

from .errors import LineageError
from .graph import to_node
from .types import Node

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_nodes(path: Path) -> List[Node]:
    """
    Read a node list from disk.

    Raises:
        LineageError: If the file cannot be parsed or does not hold a node list.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as e:
        raise LineageError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise LineageError(f"Cannot parse {path}: {e}") from e

    return parse_nodes(data, source=str(path))


def parse_nodes(data: Any, source: str = "<data>") -> List[Node]:
    """Validate already-decoded data into Nodes."""
    if isinstance(data, dict):
        data = data.get("nodes")
    if not isinstance(data, list):
        raise LineageError(f"{source}: expected a list of nodes or a mapping with a 'nodes' list")

    try:
        nodes = [to_node(item) for item in data]
    except ValidationError as e:
        raise LineageError(f"{source}: invalid node record: {e}") from e

    logger.debug(f"Loaded {len(nodes)} nodes from {source}")
    return nodes
