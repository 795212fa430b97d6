"""Tree building engine for ead-tree.

Key Components:
    TreeBuilder: Reduces markup events into a nested node tree
    Node: One element with attributes, text and ordered children
    NodeStack: Stack of currently open nodes
    ConversionResult: Finished tree with metrics and diagnostics
    normalize_whitespace: Text normalization applied to element text
"""

from .builder import BuilderState, ConversionResult, TreeBuilder
from .node import Node
from .normalize import normalize_whitespace
from .stack import NodeStack

__all__ = [
    "BuilderState",
    "ConversionResult",
    "Node",
    "NodeStack",
    "TreeBuilder",
    "normalize_whitespace",
]
