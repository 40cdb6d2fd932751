"""
End-to-end compilation: description -> model -> layout -> XML + SVG.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .builder import build_graph
from .encoder import generate_xml
from .graph import GraphModel
from .layout import LayoutEngine, compute_layout
from .schema import DiagramDescription
from .shapes import SHAPES
from .svg_renderer import render_drawio_svg
from .themes import THEMES, Theme
from .validation import XmlValidationResult, validate_drawio_xml

logger = logging.getLogger(__name__)


@dataclass
class CompileResult:
    """Everything one compile produces."""
    model: GraphModel
    xml: str
    svg: str
    validation: XmlValidationResult
    warnings: list[str] = field(default_factory=list)

    def output(self, fmt: str) -> str:
        """The document for an output format name ("drawio" or "drawio-svg")."""
        return self.xml if fmt == "drawio" else self.svg


async def compile_diagram(
    description: DiagramDescription,
    *,
    engine: Optional[LayoutEngine] = None,
    shapes: Mapping[str, str] = SHAPES,
    themes: Mapping[str, Theme] = THEMES,
) -> CompileResult:
    """
    Compile a validated description into both output formats.

    The layout engine is awaited exactly once; its exceptions propagate
    unchanged. A failed self-check shows up as ``result.validation.valid``
    being False, which points at an encoder bug rather than bad input.
    """
    model = build_graph(description, shapes=shapes, themes=themes)
    model = await compute_layout(model, description.layout, engine)

    xml = generate_xml(model)
    validation = validate_drawio_xml(xml)
    if not validation.valid:
        logger.error("Generated XML failed validation: %s", "; ".join(validation.errors))

    svg = render_drawio_svg(model, xml)
    logger.info(
        "Compiled %r: %d nodes, %d edges, %d groups",
        model.title, len(model.nodes), len(model.edges), len(model.groups),
    )
    return CompileResult(
        model=model,
        xml=xml,
        svg=svg,
        validation=validation,
        warnings=list(model.warnings),
    )


def compile_diagram_sync(description: DiagramDescription, **kwargs) -> CompileResult:
    """Blocking wrapper around ``compile_diagram`` for non-async callers."""
    return asyncio.run(compile_diagram(description, **kwargs))
