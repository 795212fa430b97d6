"""Indented plain-text outline of converted trees.

Example output::

    archdesc
        @level = collection
        did
            unittitle
                "Papers"
"""

from typing import List, Optional, TextIO

from ead_tree.shared import OutputConfig
from ead_tree.tree import Node


class OutlineWriter:
    """Writes one line per element, attribute and text value."""

    def __init__(self, config: Optional[OutputConfig] = None) -> None:
        self.config = config or OutputConfig(format="text")

    def _lines(self, root: Node) -> List[str]:
        step = " " * self.config.outline_indent
        lines: List[str] = []
        pending = [(root, 0)]
        while pending:
            node, level = pending.pop()
            lines.append(f"{step * level}{node.name}")
            inner = step * (level + 1)
            for key, value in node.sorted_attributes():
                lines.append(f"{inner}@{key} = {value}")
            if node.text is not None:
                lines.append(f'{inner}"{node.text}"')
            pending.extend((child, level + 1) for child in reversed(node.children))
        return lines

    def dumps(self, root: Node) -> str:
        return "\n".join(self._lines(root))

    def write(self, root: Node, fp: TextIO) -> None:
        fp.write(self.dumps(root))
        fp.write("\n")
