"""
Format validation - Check draw.io XML for structural issues.

Works on the text of any .drawio document (ours or hand-edited) with
pattern matching rather than a full parse, so partially broken files still
get a useful report. Compressed <diagram> bodies are expanded first.
"""

import binascii
import logging
import re
import zlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .markup import decompress_xml

logger = logging.getLogger(__name__)


class IssueSeverity(str, Enum):
    """Severity levels for validation issues."""
    ERROR = "error"      # The file will not open (or opens broken) in draw.io
    WARNING = "warning"  # Likely a mistake, but the file still loads


@dataclass
class ValidationIssue:
    """A single validation issue found in a document."""
    severity: IssueSeverity
    message: str
    cell_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "type": self.severity.value,
            "message": self.message
        }
        if self.cell_id:
            result["cell_id"] = self.cell_id
        return result


@dataclass
class XmlValidationResult:
    """Errors make a document invalid; warnings never do."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "errors": list(self.errors), "warnings": list(self.warnings)}


_CELL_RE = re.compile(r"<mxCell\b([^>]*?)(/?)>", re.DOTALL)
# Cells with custom properties or links: <object id="5" label="..."><mxCell vertex="1" .../></object>
_WRAPPER_RE = re.compile(r"<(object|UserObject)\b([^>]*?)(/?)>", re.DOTALL)
_ATTR_RE = re.compile(r'([\w:.-]+)\s*=\s*"([^"]*)"')
_DIAGRAM_BODY_RE = re.compile(r"(<diagram\b[^>]*>)(.*?)(</diagram>)", re.DOTALL)
_STYLE_RE = re.compile(r'style="([^"]+)"')
_ATTR_VALUE_RE = re.compile(r'="([^"]+)"')
_BARE_AMP_RE = re.compile(r"&(?!amp;|lt;|gt;|quot;|apos;|#)")
_QUOTED_HEX_RE = re.compile(r"""['"]#[0-9a-fA-F]+['"]|&quot;#[0-9a-fA-F]+&quot;""")

# CSS property -> draw.io style key
CSS_STYLE_NAMES = {
    "background-color": "fillColor",
    "border-color": "strokeColor",
    "font-size": "fontSize",
    "font-family": "fontFamily",
    "stroke-width": "strokeWidth",
}


def parse_attributes(tag_body: str) -> dict[str, str]:
    """Attributes of a tag, in any order."""
    return dict(_ATTR_RE.findall(tag_body))


def wrapper_spans(xml: str) -> list[tuple[int, int, str]]:
    """(start, end, id) of every <object>/<UserObject> wrapper that has an id."""
    spans = []
    for match in _WRAPPER_RE.finditer(xml):
        attrs = parse_attributes(match.group(2))
        if "id" not in attrs or match.group(3):
            continue
        closing = xml.find(f"</{match.group(1)}>", match.end())
        spans.append((match.start(), len(xml) if closing == -1 else closing, attrs["id"]))
    return spans


def expand_compressed_diagrams(xml: str) -> str:
    """
    Replace compressed <diagram> bodies with their XML.

    Raises:
        ValueError: If a body is neither XML nor valid compressed content
    """
    def expand(match: re.Match) -> str:
        body = match.group(2).strip()
        if not body or body.startswith("<"):
            return match.group(0)
        try:
            inflated = decompress_xml(body)
        except (ValueError, zlib.error, binascii.Error) as e:
            raise ValueError(f"Could not decompress <diagram> content: {e}") from e
        return f"{match.group(1)}{inflated}{match.group(3)}"

    return _DIAGRAM_BODY_RE.sub(expand, xml)


def find_issues(xml: str) -> list[ValidationIssue]:
    """
    Inspect a draw.io document and return every issue found.

    Checks for:
    - Missing <mxfile> wrapper - ERROR
    - Missing foundation cells id="0" and id="1" parent="0" - ERROR
    - Vertices without <mxGeometry as="geometry"> - ERROR
    - Edges without source/target or without relative geometry - ERROR
    - Edge source/target or cell parent ids that don't exist - ERROR
    - Duplicate cell ids - ERROR
    - CSS property names or quoted hex colors in styles - WARNING
    - Unescaped ampersands in attribute values - WARNING

    Cells inside an <object>/<UserObject> wrapper take the wrapper's id.

    Args:
        xml: Document text, compressed or not

    Returns:
        List of ValidationIssue objects
    """
    issues: list[ValidationIssue] = []

    def error(message: str, cell_id: Optional[str] = None) -> None:
        issues.append(ValidationIssue(IssueSeverity.ERROR, message, cell_id))

    def warning(message: str) -> None:
        issues.append(ValidationIssue(IssueSeverity.WARNING, message))

    try:
        xml = expand_compressed_diagrams(xml)
    except ValueError as e:
        error(str(e))

    if "<mxfile" not in xml:
        error("Missing <mxfile> wrapper element")

    wrappers = wrapper_spans(xml)
    cells = []
    for match in _CELL_RE.finditer(xml):
        attrs = parse_attributes(match.group(1))
        if "id" not in attrs:
            for start, end, wrapper_id in wrappers:
                if start < match.start() < end:
                    attrs["id"] = wrapper_id
                    break
        if match.group(2):
            block = match.group(0)
        else:
            closing = xml.find("</mxCell>", match.end())
            block = xml[match.start():] if closing == -1 else xml[match.start():closing + len("</mxCell>")]
        cells.append((attrs, block))

    all_ids: set[str] = set()
    for attrs, _ in cells:
        cell_id = attrs.get("id")
        if cell_id is None:
            continue
        if cell_id in all_ids:
            error(f'Duplicate cell id="{cell_id}"', cell_id)
        all_ids.add(cell_id)

    if not any(a.get("id") == "0" and "parent" not in a for a, _ in cells):
        error('Missing foundation cell id="0" (root cell)')
    if not any(a.get("id") == "1" and a.get("parent") == "0" for a, _ in cells):
        error('Missing foundation cell id="1" with parent="0" (default layer)')

    for attrs, block in cells:
        cell_id = attrs.get("id", "unknown")

        parent = attrs.get("parent")
        if parent is not None and parent not in all_ids:
            error(f'Cell id="{cell_id}" references non-existent parent id="{parent}"', cell_id)

        if attrs.get("vertex") == "1":
            if "<mxGeometry" not in block:
                error(f'Vertex cell id="{cell_id}" is missing <mxGeometry> element', cell_id)
            elif 'as="geometry"' not in block:
                error(f'Vertex cell id="{cell_id}" geometry is missing as="geometry" attribute', cell_id)

        if attrs.get("edge") == "1":
            for end in ("source", "target"):
                ref = attrs.get(end)
                if ref is None:
                    error(f'Edge cell id="{cell_id}" is missing {end} attribute', cell_id)
                elif ref not in all_ids:
                    error(f'Edge references non-existent {end} id="{ref}"', cell_id)
            if 'relative="1"' not in block:
                error(f'Edge cell id="{cell_id}" geometry is missing relative="1" attribute', cell_id)

    for style in _STYLE_RE.findall(xml):
        for css_name, drawio_name in CSS_STYLE_NAMES.items():
            if css_name in style:
                warning(f"Style contains CSS '{css_name}' - use '{drawio_name}' instead")
        if _QUOTED_HEX_RE.search(style):
            warning("Style contains quoted hex color - hex values should not be quoted inside style strings")

    for value in _ATTR_VALUE_RE.findall(xml):
        if _BARE_AMP_RE.search(value):
            warning(f'Possible unescaped ampersand in attribute value: "{value[:50]}..."')

    return issues


def validate_drawio_xml(xml: str) -> XmlValidationResult:
    """Validate a draw.io document. Valid iff there are no errors."""
    issues = find_issues(xml)
    errors = [i.message for i in issues if i.severity == IssueSeverity.ERROR]
    warnings = [i.message for i in issues if i.severity == IssueSeverity.WARNING]
    if errors:
        logger.debug("Validation found %d errors", len(errors))
    return XmlValidationResult(valid=not errors, errors=errors, warnings=warnings)


def validation_summary(issues: list[ValidationIssue]) -> dict:
    """
    Create a summary of validation issues.

    Args:
        issues: List of validation issues

    Returns:
        Dictionary with counts by severity
    """
    errors = len([i for i in issues if i.severity == IssueSeverity.ERROR])
    return {
        "total": len(issues),
        "errors": errors,
        "warnings": len([i for i in issues if i.severity == IssueSeverity.WARNING]),
        "valid": errors == 0
    }
