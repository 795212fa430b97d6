"""End-to-end tests for the conversion API."""

import io
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from ead_tree import (
    ConversionError,
    ConverterConfig,
    NameMismatchError,
    TreeConverter,
    UpstreamTokenizeError,
    convert,
    convert_file,
    convert_string,
    to_json,
)

FINDING_AID = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE ead>
<ead xmlns="urn:isbn:1-931666-22-9">
  <!-- generated by an archival management system -->
  <eadheader langencoding="iso639-2b" audience="internal">
    <eadid countrycode="us">mss-001</eadid>
  </eadheader>
  <archdesc level="collection">
    <did>
      <unittitle>Papers of
        Jane   Doe</unittitle>
      <unitdate normal="1900/1950" type="inclusive">1900-1950</unitdate>
    </did>
    <dsc>
      <c01 level="series"/>
    </dsc>
  </archdesc>
</ead>
"""


class TestConvert:
    """Test the simple conversion functions."""

    def test_convert_string(self) -> None:
        """Test a finding aid becomes a nested tree."""
        result = convert_string(FINDING_AID)
        root = result.root

        assert root.name == "ead"
        assert root.text is None
        assert [child.name for child in root.children] == ["eadheader", "archdesc"]
        assert root.find("eadid").text == "mss-001"
        assert root.find("unittitle").text == "Papers of Jane Doe"
        assert root.find("unitdate").attributes == {
            "normal": "1900/1950",
            "type": "inclusive",
        }
        assert root.find("c01").is_empty
        assert result.element_count == 9

    def test_convert_dispatches_on_input_type(self, tmp_path) -> None:
        """Test str, bytes, streams and paths are all accepted."""
        path = tmp_path / "doc.xml"
        path.write_bytes(b"<a><b/></a>")

        for input_data in ("<a><b/></a>", b"<a><b/></a>", io.BytesIO(b"<a><b/></a>"), path):
            assert convert(input_data).root.children[0].name == "b"

    def test_convert_rejects_unknown_input(self) -> None:
        """Test unsupported input types."""
        with pytest.raises(TypeError, match="Unsupported input type"):
            convert(42)  # type: ignore

    def test_convert_file(self, tmp_path) -> None:
        """Test converting a file path given as a string."""
        path = tmp_path / "finding-aid.xml"
        path.write_text(FINDING_AID, encoding="utf-8")

        result = convert_file(str(path))

        assert result.root.name == "ead"
        assert result.performance.bytes_read == path.stat().st_size

    def test_missing_file_raises_os_error(self, tmp_path) -> None:
        """Test file-system errors propagate."""
        with pytest.raises(FileNotFoundError):
            convert_file(tmp_path / "missing.xml")

    def test_latin1_document(self) -> None:
        """Test the declared encoding is honoured for bytes input."""
        markup = '<?xml version="1.0" encoding="ISO-8859-1"?><a>Café</a>'.encode("latin-1")

        assert convert(markup).root.text == "Café"

    def test_to_json(self) -> None:
        """Test JSON output of a converted document."""
        result = convert_string('<a z="1" y="2"><b>text</b><c/></a>')

        assert json.loads(to_json(result)) == {
            "name": "a",
            "attr": {"y": "2", "z": "1"},
            "children": [{"name": "b", "value": "text"}, {"name": "c"}],
        }
        assert to_json(result.root, indent=None).startswith('{"name": "a", "attr": {"y"')


class TestConversionErrors:
    """Test errors surfacing through the API."""

    def test_malformed_markup(self) -> None:
        """Test tokenizer errors abort the conversion."""
        with pytest.raises(UpstreamTokenizeError):
            convert_string("<a><b></a>")

    def test_unclosed_document(self) -> None:
        """Test truncated input aborts the conversion."""
        with pytest.raises(ConversionError):
            convert_string("<ead><archdesc>")

    def test_file_closed_after_error(self, tmp_path) -> None:
        """Test the input file is closed when conversion fails."""
        path = tmp_path / "broken.xml"
        path.write_text("<a><b></a>", encoding="utf-8")
        opened = []
        real_open = Path.open

        def tracking_open(self, *args, **kwargs):
            handle = real_open(self, *args, **kwargs)
            opened.append(handle)
            return handle

        with patch.object(Path, "open", tracking_open):
            with pytest.raises(UpstreamTokenizeError):
                convert_file(path)

        assert len(opened) == 1
        assert opened[0].closed


class TestTreeConverter:
    """Test the configured converter."""

    def test_correlation_id_propagates(self) -> None:
        """Test a fixed correlation id reaches the result."""
        converter = TreeConverter(correlation_id="batch-7")

        assert converter.convert("<a/>").correlation_id == "batch-7"

    def test_generated_correlation_ids_differ(self) -> None:
        """Test a fresh id is generated per conversion."""
        converter = TreeConverter()

        first = converter.convert("<a/>").correlation_id
        second = converter.convert("<a/>").correlation_id
        assert first and second and first != second

    def test_namespace_declarations_kept_as_attributes(self) -> None:
        """Test xmlns declarations appear among the root attributes."""
        result = convert_string(
            '<ead xmlns="urn:isbn:1-931666-22-9" '
            'xmlns:xlink="http://www.w3.org/1999/xlink" audience="external"/>'
        )

        assert result.root.attributes == {
            "xmlns": "urn:isbn:1-931666-22-9",
            "xlink": "http://www.w3.org/1999/xlink",
            "audience": "external",
        }

    def test_keep_namespaces(self) -> None:
        """Test namespace handling follows configuration."""
        config = ConverterConfig().override(source__strip_namespaces=False)

        result = TreeConverter(config).convert('<a xmlns="urn:x"/>')
        assert result.root.name == "{urn:x}a"

    def test_to_text_uses_configured_format(self) -> None:
        """Test the outline format."""
        config = ConverterConfig().override(output__format="text")
        converter = TreeConverter(config)

        result = converter.convert('<a k="v">t</a>')
        assert converter.to_text(result) == 'a\n    @k = v\n    "t"'

    def test_default_config_is_strict(self) -> None:
        """Test close names are checked unless configured otherwise."""
        assert TreeConverter().config.tree.strict_close_names is True
        assert issubclass(NameMismatchError, ConversionError)
