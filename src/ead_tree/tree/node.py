"""Node model for converted markup trees."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(eq=False)
class Node:
    """One markup element with its attributes, text and ordered children.

    Attributes are stored as a plain mapping; renderers call
    ``sorted_attributes()`` to get a deterministic order.
    """

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate node values."""
        if not self.name:
            raise ValueError("Node name cannot be empty")

    @property
    def has_text(self) -> bool:
        return self.text is not None

    @property
    def is_empty(self) -> bool:
        """True for an element without text and without children."""
        return self.text is None and not self.children

    def add_child(self, child: "Node") -> None:
        """Append ``child`` after the existing children."""
        if not isinstance(child, Node):
            raise TypeError("Child must be a Node instance")
        if child is self:
            raise ValueError("Node cannot be its own child")
        self.children.append(child)

    def sorted_attributes(self) -> List[Tuple[str, str]]:
        """Attribute pairs sorted by key."""
        return sorted(self.attributes.items())

    def iter(self) -> Iterator["Node"]:
        """Iterate over this node and its descendants in document order."""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.children))

    def find(self, name: str) -> Optional["Node"]:
        """Find the first descendant (excluding self) named ``name``."""
        return next(
            (node for node in self.iter() if node is not self and node.name == name),
            None,
        )

    def find_all(self, name: str) -> List["Node"]:
        """Find all descendants (excluding self) named ``name``."""
        return [
            node for node in self.iter() if node is not self and node.name == name
        ]

    @property
    def element_count(self) -> int:
        """Number of nodes in this subtree, self included."""
        return sum(1 for _ in self.iter())

    @property
    def max_depth(self) -> int:
        """Depth of the deepest descendant (a leaf has depth 0)."""
        depth = 0
        pending = [(self, 0)]
        while pending:
            node, level = pending.pop()
            depth = max(depth, level)
            pending.extend((child, level + 1) for child in node.children)
        return depth
