"""
drawio-gen - Compile JSON graph descriptions into draw.io diagrams.

This package provides the compiler used by the CLI, the HTTP service and
the MCP tools: schema validation, model building, layout, the draw.io
encoder and validator, and the SVG renderer.
"""

from .schema import (
    # Input models
    DiagramDescription,
    NodeSpec,
    EdgeSpec,
    GroupSpec,
    LayoutConfig,
    StyleOverride,
    # Validation
    DescriptionValidation,
    validate_description,
    description_json_schema,
)

from .graph import GraphModel, GraphNode, GraphEdge, GraphGroup
from .builder import build_graph
from .layout import LayoutEngine, NestedLayoutEngine, compute_layout
from .encoder import generate_xml
from .validation import validate_drawio_xml, XmlValidationResult
from .svg_renderer import render_svg, render_drawio_svg
from .export import export_drawio, export_drawio_svg, write_drawio, write_drawio_svg, decode_drawio_svg
from .analysis import summarize_model, find_connected_components
from .pipeline import compile_diagram, compile_diagram_sync, CompileResult

__version__ = "0.1.0"

__all__ = [
    # Schema
    "DiagramDescription",
    "NodeSpec",
    "EdgeSpec",
    "GroupSpec",
    "LayoutConfig",
    "StyleOverride",
    "DescriptionValidation",
    "validate_description",
    "description_json_schema",
    # Model
    "GraphModel",
    "GraphNode",
    "GraphEdge",
    "GraphGroup",
    "build_graph",
    # Layout
    "LayoutEngine",
    "NestedLayoutEngine",
    "compute_layout",
    # Encoding
    "generate_xml",
    "validate_drawio_xml",
    "XmlValidationResult",
    "render_svg",
    "render_drawio_svg",
    # Export
    "export_drawio",
    "export_drawio_svg",
    "write_drawio",
    "write_drawio_svg",
    "decode_drawio_svg",
    # Analysis
    "summarize_model",
    "find_connected_components",
    # Pipeline
    "compile_diagram",
    "compile_diagram_sync",
    "CompileResult",
]
