"""
Exporters for the two output formats.

- .drawio: the encoder's XML as-is
- .drawio.svg: an SVG preview with the compressed XML in its ``content``
  attribute; draw.io opens it as an editable diagram
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from .encoder import generate_xml
from .graph import GraphModel
from .markup import decompress_xml, unescape_xml
from .svg_renderer import render_drawio_svg

logger = logging.getLogger(__name__)

_CONTENT_RE = re.compile(r'<svg\b[^>]*?\scontent="([^"]*)"', re.DOTALL)


def export_drawio(model: GraphModel) -> str:
    return generate_xml(model)


def export_drawio_svg(model: GraphModel, xml: Optional[str] = None) -> str:
    """
    Render the dual-format SVG.

    Args:
        model: Positioned graph model
        xml: Already encoded XML for the same model (encoded here if omitted)
    """
    return render_drawio_svg(model, xml if xml is not None else generate_xml(model))


def write_drawio(model: GraphModel, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(export_drawio(model), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def write_drawio_svg(model: GraphModel, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(export_drawio_svg(model), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def decode_drawio_svg(svg: str) -> str:
    """
    Recover the draw.io XML embedded in a .drawio.svg file.

    Raises:
        ValueError: If the root <svg> has no ``content`` attribute
    """
    match = _CONTENT_RE.search(svg)
    if match is None:
        raise ValueError("SVG has no embedded draw.io content")
    content = unescape_xml(match.group(1)).strip()
    if content.startswith("<"):
        # Uncompressed content (some editors store plain XML)
        return content
    return decompress_xml(content)
