"""Public conversion API for ead-tree."""

from .converter import (
    InputType,
    TreeConverter,
    convert,
    convert_file,
    convert_string,
    to_json,
)

__all__ = [
    "InputType",
    "TreeConverter",
    "convert",
    "convert_file",
    "convert_string",
    "to_json",
]
