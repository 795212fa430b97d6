"""JSON serialization of converted trees.

Each node becomes an object with ``name``, ``attr``, ``value`` and
``children`` keys. Keys whose value is absent or empty are omitted, so an
empty element serializes as ``{"name": ...}``.
"""

import json
from typing import Any, Dict, Optional, TextIO

from ead_tree.shared import OutputConfig
from ead_tree.tree import Node


def node_to_dict(node: Node) -> Dict[str, Any]:
    """Convert ``node`` and its subtree to plain dictionaries.

    Attribute keys are inserted in sorted order so the JSON text is
    deterministic.
    """
    result: Dict[str, Any] = {"name": node.name}

    if node.attributes:
        result["attr"] = dict(node.sorted_attributes())

    if node.text:
        result["value"] = node.text

    if node.children:
        result["children"] = [node_to_dict(child) for child in node.children]

    return result


class JSONTreeWriter:
    """Writes trees as JSON documents."""

    def __init__(self, config: Optional[OutputConfig] = None) -> None:
        self.config = config or OutputConfig()

    def dumps(self, root: Node) -> str:
        return json.dumps(
            node_to_dict(root),
            indent=self.config.indent,
            ensure_ascii=self.config.ensure_ascii,
        )

    def write(self, root: Node, fp: TextIO) -> None:
        fp.write(self.dumps(root))
        fp.write("\n")
