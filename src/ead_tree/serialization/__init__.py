"""Serializers turning converted trees into text.

Key Components:
    JSONTreeWriter: Nested JSON objects with sorted attributes
    OutlineWriter: Indented text outline for quick inspection
    get_writer: Writer lookup by output format name
"""

from typing import Optional, Union

from ead_tree.shared import ConfigValidationError, OutputConfig

from .json_writer import JSONTreeWriter, node_to_dict
from .outline import OutlineWriter

TreeWriter = Union[JSONTreeWriter, OutlineWriter]

WRITERS = {
    "json": JSONTreeWriter,
    "text": OutlineWriter,
}


def get_writer(
    format_name: Optional[str] = None, config: Optional[OutputConfig] = None
) -> TreeWriter:
    """Get the writer for ``format_name`` (defaults to ``config.format``)."""
    config = config or OutputConfig()
    format_name = format_name or config.format
    try:
        writer_class = WRITERS[format_name]
    except KeyError:
        raise ConfigValidationError(
            f"Unknown output format: {format_name}",
            field_name="format",
            suggestions=sorted(WRITERS),
        ) from None
    return writer_class(config)


__all__ = [
    "JSONTreeWriter",
    "OutlineWriter",
    "TreeWriter",
    "WRITERS",
    "get_writer",
    "node_to_dict",
]
