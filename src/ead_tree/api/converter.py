"""Conversion API for ead-tree.

This module wires the event source, the tree builder and the writers
together. Module-level functions cover the common cases; ``TreeConverter``
holds a configuration for repeated use.
"""

import io
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ead_tree.events import MarkupEventSource
from ead_tree.serialization import get_writer
from ead_tree.shared import ConversionError, ConverterConfig, get_logger
from ead_tree.tree import ConversionResult, Node, TreeBuilder

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, Path]


class TreeConverter:
    """Converts markup documents into ``Node`` trees.

    Each call to a ``convert*`` method is an independent conversion with its
    own builder state. Errors are raised as ``ConversionError`` subclasses;
    file-system failures propagate as ``OSError``.
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize converter.

        Args:
            config: Converter configuration, defaults to the strict preset
            correlation_id: Correlation ID shared by all conversions of this
                converter; a fresh one is generated per conversion when omitted
        """
        self.config = config or ConverterConfig()
        self.correlation_id = correlation_id

    def _correlation_id(self) -> str:
        return self.correlation_id or uuid.uuid4().hex

    def convert(self, input_data: InputType) -> ConversionResult:
        """Convert markup from a path, string, bytes or binary stream.

        Strings are treated as markup text, not as file names; pass a
        ``Path`` to read a file.
        """
        if isinstance(input_data, Path):
            return self.convert_file(input_data)
        if isinstance(input_data, str):
            return self.convert_string(input_data)
        if isinstance(input_data, (bytes, bytearray)):
            return self.convert_stream(io.BytesIO(bytes(input_data)))
        if hasattr(input_data, "read"):
            return self.convert_stream(input_data)
        raise TypeError(f"Unsupported input type: {type(input_data).__name__}")

    def convert_string(self, markup: str) -> ConversionResult:
        """Convert markup text, encoded as UTF-8 before parsing."""
        return self.convert_stream(io.BytesIO(markup.encode("utf-8")))

    def convert_file(self, path: Union[str, Path]) -> ConversionResult:
        """Convert the file at ``path``.

        The file is closed on every exit path, including conversion errors.
        """
        path = Path(path)
        with path.open("rb") as stream:
            return self.convert_stream(stream, source_name=str(path))

    def convert_stream(
        self, stream: BinaryIO, source_name: Optional[str] = None
    ) -> ConversionResult:
        """Convert markup read from a binary stream.

        The stream is read to the end but not closed.
        """
        correlation_id = self._correlation_id()
        logger = get_logger(__name__, correlation_id, "converter")
        logger.info("Starting conversion", extra={"source": source_name or "<stream>"})

        source = MarkupEventSource(stream, self.config.source, correlation_id)
        builder = TreeBuilder(self.config.tree, correlation_id)

        try:
            result = builder.build(source)
        except ConversionError as e:
            logger.debug(
                "Conversion failed",
                extra={"source": source_name or "<stream>", "error": e.describe()},
            )
            raise

        result.performance.bytes_read = source.bytes_read
        return result

    def to_text(self, result: Union[ConversionResult, Node]) -> str:
        """Serialize a result or node with the configured output format."""
        root = result.root if isinstance(result, ConversionResult) else result
        return get_writer(config=self.config.output).dumps(root)


def convert(
    input_data: InputType, config: Optional[ConverterConfig] = None
) -> ConversionResult:
    """Convert markup from any supported input.

    Examples:
        >>> result = convert('<ead><eadheader id="h1"/></ead>')
        >>> result.root.name
        'ead'
        >>> result.root.children[0].attributes
        {'id': 'h1'}
    """
    return TreeConverter(config).convert(input_data)


def convert_string(
    markup: str, config: Optional[ConverterConfig] = None
) -> ConversionResult:
    """Convert markup text."""
    return TreeConverter(config).convert_string(markup)


def convert_file(
    path: Union[str, Path], config: Optional[ConverterConfig] = None
) -> ConversionResult:
    """Convert the file at ``path``."""
    return TreeConverter(config).convert_file(path)


def to_json(result: Union[ConversionResult, Node], indent: Optional[int] = 2) -> str:
    """Serialize a result or node as JSON."""
    config = ConverterConfig().override(output__indent=indent)
    return TreeConverter(config).to_text(result)
