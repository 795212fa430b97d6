"""Stack of currently open nodes."""

from typing import Iterator, List, Optional

from .node import Node


class NodeStack:
    """Open-element ancestry; the top is the innermost open element.

    ``peek`` and ``pop`` return ``None`` on an empty stack so the caller can
    raise an error carrying the event context.
    """

    def __init__(self) -> None:
        self._nodes: List[Node] = []

    def push(self, node: Node) -> None:
        self._nodes.append(node)

    def peek(self) -> Optional[Node]:
        if not self._nodes:
            return None
        return self._nodes[-1]

    def pop(self) -> Optional[Node]:
        if not self._nodes:
            return None
        return self._nodes.pop()

    def clear(self) -> None:
        self._nodes.clear()

    def path(self) -> List[str]:
        """Names of the open elements, outermost first."""
        return [node.name for node in self._nodes]

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)
