"""Tests for the lxml-backed markup event source."""

import io
from typing import List

import pytest

from ead_tree.events import EventType, MarkupEvent, MarkupEventSource, iter_events
from ead_tree.shared import ConversionError, SourceConfig, UpstreamTokenizeError


def _events(markup: str, **config) -> List[MarkupEvent]:
    stream = io.BytesIO(markup.encode("utf-8"))
    return list(MarkupEventSource(stream, SourceConfig(**config)))


class TestMarkupEvent:
    """Test event construction."""

    def test_open_event_requires_name(self) -> None:
        """Test an open event without a name is rejected."""
        with pytest.raises(ValueError, match="Open event requires an element name"):
            MarkupEvent(EventType.OPEN)

    def test_text_event_requires_text(self) -> None:
        """Test a text event without text is rejected."""
        with pytest.raises(ValueError, match="Text event requires text"):
            MarkupEvent(EventType.TEXT)

    def test_factories(self) -> None:
        """Test the factory class methods."""
        assert MarkupEvent.open("a", [("k", "v")]).attributes == (("k", "v"),)
        assert MarkupEvent.text_event(" x ").text == " x "
        assert MarkupEvent.close().name is None
        assert MarkupEvent.end_of_stream().type is EventType.END_OF_STREAM


class TestMarkupEventSource:
    """Test event production from markup bytes."""

    def test_event_sequence(self) -> None:
        """Test open, text and close events in document order."""
        events = _events('<a x="1"><b>hi</b></a>')

        assert events == [
            MarkupEvent.open("a", [("x", "1")]),
            MarkupEvent.open("b"),
            MarkupEvent.text_event("hi"),
            MarkupEvent.close("b"),
            MarkupEvent.close("a"),
            MarkupEvent.end_of_stream(),
        ]

    def test_comments_and_processing_instructions_ignored(self) -> None:
        """Test non-element markup produces no events."""
        events = _events('<?xml version="1.0"?><a><!-- note --><?render fast?>t</a>')

        assert [event.type for event in events] == [
            EventType.OPEN,
            EventType.TEXT,
            EventType.CLOSE,
            EventType.END_OF_STREAM,
        ]
        assert events[1].text == "t"

    def test_entity_references_joined_into_one_text_event(self) -> None:
        """Test text split around entities is reported once."""
        events = _events("<a>x &amp; y &lt;z&gt;</a>")

        texts = [event.text for event in events if event.type is EventType.TEXT]
        assert texts == ["x & y <z>"]

    def test_cdata_joined_with_surrounding_text(self) -> None:
        """Test CDATA content is part of the surrounding text run."""
        events = _events("<a>pre<![CDATA[<raw>]]>post</a>")

        texts = [event.text for event in events if event.type is EventType.TEXT]
        assert texts == ["pre<raw>post"]

    def test_small_chunks_produce_same_events(self) -> None:
        """Test chunk boundaries do not split events."""
        markup = '<ead><did><unittitle id="t">Papers of Jane Doe</unittitle></did></ead>'

        assert _events(markup, chunk_size=3) == _events(markup)

    def test_namespaces_stripped_by_default(self) -> None:
        """Test element and attribute names lose their namespace."""
        events = _events(
            '<e:ead xmlns:e="urn:isbn:1-931666-22-9" '
            'xmlns:xlink="http://www.w3.org/1999/xlink">'
            '<e:dao xlink:href="img.png"/></e:ead>'
        )

        assert events[0].name == "ead"
        assert events[0].attributes == (
            ("e", "urn:isbn:1-931666-22-9"),
            ("xlink", "http://www.w3.org/1999/xlink"),
        )
        assert events[1].name == "dao"
        assert events[1].attributes == (("href", "img.png"),)

    def test_default_namespace_declaration_kept(self) -> None:
        """Test a default namespace declaration survives as an xmlns attribute."""
        events = _events('<ead xmlns="urn:isbn:1-931666-22-9" audience="external"/>')

        assert events[0].attributes == (
            ("xmlns", "urn:isbn:1-931666-22-9"),
            ("audience", "external"),
        )

    def test_namespaces_kept_when_configured(self) -> None:
        """Test Clark notation names are kept on request."""
        events = _events('<e:ead xmlns:e="urn:x"/>', strip_namespaces=False)

        assert events[0].name == "{urn:x}ead"
        assert events[0].attributes == (("xmlns:e", "urn:x"),)

    def test_bytes_read(self) -> None:
        """Test the source counts consumed bytes."""
        markup = b"<a>text</a>"
        source = MarkupEventSource(io.BytesIO(markup))
        list(source)

        assert source.bytes_read == len(markup)

    def test_malformed_markup_raises_upstream_error(self) -> None:
        """Test lexical errors surface as UpstreamTokenizeError."""
        with pytest.raises(UpstreamTokenizeError) as exc_info:
            _events("<a>\n<b></a>")

        assert exc_info.value.line is not None
        assert exc_info.value.kind == "UpstreamTokenizeError"

    def test_malformed_markup_position_reported_once(self) -> None:
        """Test the parser position is not repeated inside the message."""
        with pytest.raises(UpstreamTokenizeError) as exc_info:
            _events("<a>\n<b></a>")

        error = exc_info.value
        assert error.column is not None
        assert error.describe().count(error.location) == 1

    def test_unclosed_angle_bracket_raises_upstream_error(self) -> None:
        """Test a broken tag is rejected."""
        with pytest.raises(UpstreamTokenizeError):
            _events("<a><b</a>")

    def test_empty_input_raises_upstream_error(self) -> None:
        """Test empty input is not a document."""
        with pytest.raises(UpstreamTokenizeError, match="input is empty"):
            _events("")

    def test_truncated_document_is_rejected(self) -> None:
        """Test a document ending inside an element fails."""
        with pytest.raises(ConversionError):
            _events("<a><b>")

    def test_iter_events_helper(self) -> None:
        """Test the functional helper."""
        events = list(iter_events(io.BytesIO(b"<a/>")))

        assert [event.type for event in events] == [
            EventType.OPEN,
            EventType.CLOSE,
            EventType.END_OF_STREAM,
        ]
