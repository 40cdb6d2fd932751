"""
Markup helpers shared by the builder, encoder, renderer and validator.

- Escaping for XML attribute values and text content
- Idempotent attribute escaping (existing entities are left untouched)
- Number formatting for coordinates
- Raw-deflate + base64 compression used for embedded diagram content
"""
import base64
import re
import zlib
from urllib.parse import unquote

# A "&" that already starts a character or entity reference
_ENTITY_RE = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);)")

_UNESCAPE = [
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&#39;", "'"),
    ("&#10;", "\n"),
    ("&amp;", "&"),
]


def escape_xml(text: str) -> str:
    """Escape the five reserved markup characters, and line breaks as ``&#10;``."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
        .replace("\n", "&#10;")
    )


def escape_attr(text: str) -> str:
    """
    Escape text for a double-quoted attribute value.

    Ampersands that already begin an entity are kept as-is, so text escaped
    once by ``escape_xml`` passes through unchanged.
    """
    text = _ENTITY_RE.sub("&amp;", text)
    return (
        text.replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
        .replace("\n", "&#10;")
    )


def escape_text(text: str) -> str:
    """Escape text content (element body, not an attribute)."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def unescape_xml(text: str) -> str:
    """Reverse ``escape_xml``. ``&amp;`` is handled last so it is undone once."""
    for entity, char in _UNESCAPE:
        text = text.replace(entity, char)
    return text


def format_number(value: float) -> str:
    """Format a coordinate: integers without a decimal point, others to 2 places."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def compress_xml(xml: str) -> str:
    """Raw DEFLATE at maximum ratio, then base64 (the form draw.io reads)."""
    compressor = zlib.compressobj(9, zlib.DEFLATED, -zlib.MAX_WBITS)
    compressed = compressor.compress(xml.encode("utf-8")) + compressor.flush()
    return base64.b64encode(compressed).decode("ascii")


def decompress_xml(data: str) -> str:
    """Reverse ``compress_xml``; also accepts URL-encoded payloads."""
    raw = zlib.decompress(base64.b64decode(data.strip()), -zlib.MAX_WBITS)
    text = raw.decode("utf-8")
    if text.startswith("%3C"):
        text = unquote(text)
    return text
