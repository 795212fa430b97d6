"""Event source reading markup through lxml's feed parser.

The parser is driven with a *target* object, so lxml never builds its own
tree: every start tag, end tag and run of character data is turned into a
``MarkupEvent`` as soon as the chunk containing it has been fed. Comments,
processing instructions and the doctype have no target callbacks and are
dropped by lxml.
"""

import re
from typing import BinaryIO, Dict, Iterator, List, Optional, Tuple

from lxml import etree

from ead_tree.shared import SourceConfig, UpstreamTokenizeError, get_logger

from .events import MarkupEvent

# libxml2 appends the position to its messages; it is reported separately.
_POSITION_SUFFIX = re.compile(r",\s*line \d+, column \d+\s*$")


class _EventCollector:
    """lxml parser target buffering events between feeds.

    Namespace declarations are reported as attributes of the element that
    declares them: ``xmlns`` or the bare prefix when namespaces are stripped,
    ``xmlns`` or ``xmlns:prefix`` otherwise.

    Adjacent ``data`` callbacks (lxml splits text around entity references
    and CDATA sections) are joined into a single text event.
    """

    def __init__(self, strip_namespaces: bool) -> None:
        self.strip_namespaces = strip_namespaces
        self.events: List[MarkupEvent] = []
        self._text: List[str] = []
        self._declarations: List[Tuple[str, str]] = []

    def _local(self, name: str) -> str:
        if self.strip_namespaces and name.startswith("{"):
            return etree.QName(name).localname
        return name

    def _flush_text(self) -> None:
        if self._text:
            self.events.append(MarkupEvent.text_event("".join(self._text)))
            self._text = []

    def start_ns(self, prefix: Optional[str], uri: str) -> None:
        if not prefix:
            name = "xmlns"
        elif self.strip_namespaces:
            name = prefix
        else:
            name = f"xmlns:{prefix}"
        self._declarations.append((name, uri))

    def start(self, tag: str, attrib: Dict[str, str]) -> None:
        self._flush_text()
        attributes, self._declarations = self._declarations, []
        attributes += [(self._local(key), value) for key, value in attrib.items()]
        self.events.append(MarkupEvent.open(self._local(tag), attributes))

    def end(self, tag: str) -> None:
        self._flush_text()
        self.events.append(MarkupEvent.close(self._local(tag)))

    def data(self, data: str) -> None:
        self._text.append(data)

    def close(self) -> None:
        self._flush_text()

    def drain(self) -> List[MarkupEvent]:
        events, self.events = self.events, []
        return events


class MarkupEventSource:
    """Iterable of markup events read from a binary stream.

    The source does not own the stream; callers open and close it.
    """

    def __init__(
        self,
        stream: BinaryIO,
        config: Optional[SourceConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.stream = stream
        self.config = config or SourceConfig()
        self.logger = get_logger(__name__, correlation_id, "event_source")
        self.bytes_read = 0

    def _new_parser(self, collector: _EventCollector) -> etree.XMLParser:
        return etree.XMLParser(
            target=collector,
            resolve_entities=self.config.resolve_entities,
            huge_tree=self.config.huge_tree,
            no_network=True,
        )

    def __iter__(self) -> Iterator[MarkupEvent]:
        collector = _EventCollector(self.config.strip_namespaces)
        parser = self._new_parser(collector)

        try:
            while True:
                chunk = self.stream.read(self.config.chunk_size)
                if not chunk:
                    break
                self.bytes_read += len(chunk)
                parser.feed(chunk)
                yield from collector.drain()
            if self.bytes_read == 0:
                raise UpstreamTokenizeError("input is empty")
            parser.close()
        except etree.XMLSyntaxError as e:
            line, column = e.position if e.position else (e.lineno, None)
            self.logger.debug(
                "Tokenizer rejected input",
                extra={"line": line, "column": column, "bytes_read": self.bytes_read},
            )
            message = _POSITION_SUFFIX.sub("", e.msg or str(e))
            raise UpstreamTokenizeError(message, line=line, column=column) from e

        yield from collector.drain()
        yield MarkupEvent.end_of_stream()


def iter_events(
    stream: BinaryIO, config: Optional[SourceConfig] = None
) -> Iterator[MarkupEvent]:
    """Iterate over the markup events of ``stream``."""
    return iter(MarkupEventSource(stream, config))
