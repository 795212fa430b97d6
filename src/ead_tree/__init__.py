"""ead-tree: markup-to-tree conversion.

Streams hierarchical markup (typically EAD finding aids) through lxml,
reduces the resulting open/text/close events into an ordered node tree and
serializes that tree as JSON.

Progressive API Disclosure:
- Level 1: Simple functions - convert(), convert_string(), convert_file()
- Level 2: Configured converter - TreeConverter class
- Level 3: Event-level driving - TreeBuilder with any event iterable
"""

__version__ = "0.1.0"
__author__ = "EAD Tree Team"

from .api import TreeConverter, convert, convert_file, convert_string, to_json
from .shared.config import ConverterConfig
from .shared.errors import (
    ConversionError,
    EmptyStackError,
    NameMismatchError,
    UnterminatedStreamError,
    UpstreamTokenizeError,
)
from .tree import ConversionResult, Node, TreeBuilder, normalize_whitespace

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple conversion functions
    "convert",
    "convert_string",
    "convert_file",
    "to_json",

    # Level 2: Configured converter
    "TreeConverter",
    "ConverterConfig",

    # Level 3: Tree building
    "TreeBuilder",
    "Node",
    "ConversionResult",
    "normalize_whitespace",

    # Errors
    "ConversionError",
    "EmptyStackError",
    "NameMismatchError",
    "UnterminatedStreamError",
    "UpstreamTokenizeError",
]
