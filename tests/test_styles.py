"""Tests for StyleMap and the markup helpers."""

import base64
import zlib

from drawio_gen.markup import (
    compress_xml,
    decompress_xml,
    escape_attr,
    escape_text,
    escape_xml,
    format_number,
    unescape_xml,
)
from drawio_gen.styles import StyleMap


class TestStyleMap:
    """Tests for parsing and serializing draw.io style strings."""

    def test_parse_keeps_order_and_flags(self) -> None:
        style = StyleMap.parse("rhombus;whiteSpace=wrap;html=1;")

        assert list(style) == ["rhombus", "whiteSpace", "html"]
        assert style["rhombus"] is None
        assert style["whiteSpace"] == "wrap"

    def test_serialize_matches_input(self) -> None:
        text = "rhombus;whiteSpace=wrap;html=1;"
        assert StyleMap.parse(text).serialize() == text

    def test_set_replaces_in_place(self) -> None:
        """Overriding a key never produces a duplicate."""
        style = StyleMap.parse("fillColor=#fff;strokeColor=#000;")
        style.set("fillColor", "#ff0000")

        assert style.serialize() == "fillColor=#ff0000;strokeColor=#000;"

    def test_set_converts_values(self) -> None:
        style = StyleMap().merge([
            ("rounded", True),
            ("dashed", False),
            ("fontSize", 14.0),
            ("opacity", 50.5),
        ])

        assert style.serialize() == "rounded=1;dashed=0;fontSize=14;opacity=50.5;"

    def test_flag(self) -> None:
        style = StyleMap.parse("rounded=1;dashed=0;ellipse;")

        assert style.flag("rounded")
        assert not style.flag("dashed")
        assert style.flag("ellipse")
        assert not style.flag("shadow")

    def test_number_falls_back_on_bad_values(self) -> None:
        style = StyleMap.parse("fontSize=14;strokeWidth=thick;")

        assert style.number("fontSize", 12) == 14
        assert style.number("strokeWidth", 1) == 1
        assert style.number("missing", 7) == 7

    def test_empty_tokens_ignored(self) -> None:
        assert StyleMap.parse(";;html=1;;").serialize() == "html=1;"


class TestEscaping:
    """Tests for markup escaping."""

    def test_escape_xml_all_five(self) -> None:
        assert escape_xml("""<a href="x">Tom & Jerry's</a>""") == (
            "&lt;a href=&quot;x&quot;&gt;Tom &amp; Jerry&apos;s&lt;/a&gt;"
        )

    def test_escape_attr_is_idempotent(self) -> None:
        """Text that was escaped once passes through unchanged."""
        once = escape_xml('R&D <"team">')
        assert escape_attr(once) == once
        assert escape_attr(escape_attr(once)) == once

    def test_escape_attr_escapes_raw_characters(self) -> None:
        assert escape_attr('A & B < "C"') == "A &amp; B &lt; &quot;C&quot;"

    def test_escape_attr_keeps_numeric_references(self) -> None:
        assert escape_attr("&#10;&#x41;") == "&#10;&#x41;"

    def test_unescape_recovers_original(self) -> None:
        for text in ["Tom & Jerry's <\"show\">", "&amp; literal", "plain"]:
            assert unescape_xml(escape_xml(text)) == text

    def test_escape_text_leaves_quotes(self) -> None:
        assert escape_text('"a" & <b>') == '"a" &amp; &lt;b&gt;'


class TestNumbersAndCompression:
    """Tests for coordinate formatting and embedded content compression."""

    def test_format_number(self) -> None:
        assert format_number(10.0) == "10"
        assert format_number(10.5) == "10.5"
        assert format_number(1 / 3) == "0.33"
        assert format_number(-4) == "-4"

    def test_compression_is_raw_deflate(self) -> None:
        """draw.io expects raw DEFLATE (no zlib header) under base64."""
        xml = "<mxfile><diagram>hello</diagram></mxfile>"
        data = compress_xml(xml)

        raw = zlib.decompress(base64.b64decode(data), -zlib.MAX_WBITS)
        assert raw.decode("utf-8") == xml
        assert decompress_xml(data) == xml

    def test_decompress_url_encoded_payload(self) -> None:
        compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
        payload = compressor.compress(b"%3CmxGraphModel%3E%3C%2FmxGraphModel%3E") + compressor.flush()

        assert decompress_xml(base64.b64encode(payload).decode()) == "<mxGraphModel></mxGraphModel>"


class TestLineBreaks:
    """Tests for line breaks in attribute values."""

    def test_newline_becomes_character_reference(self) -> None:
        assert escape_xml("first\nsecond") == "first&#10;second"
        assert escape_attr("first\nsecond") == "first&#10;second"

    def test_newline_escaping_is_idempotent(self) -> None:
        once = escape_xml("a & b\nc")
        assert escape_attr(once) == once
        assert unescape_xml(once) == "a & b\nc"
