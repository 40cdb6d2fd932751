#!/usr/bin/env python3
"""
drawio-gen MCP Server

Provides MCP tools for AI agents to generate and check draw.io diagrams.
Tools run the compiler in-process and return JSON text.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .analysis import summarize_model
from .logging_config import configure_logging
from .pipeline import compile_diagram
from .schema import validate_description
from .shapes import list_categories, list_shapes
from .themes import list_themes
from .validation import validate_drawio_xml

logger = logging.getLogger(__name__)

# Create MCP server
mcp = FastMCP("drawio-gen")


# ============================================================================
# GENERATION TOOLS
# ============================================================================

@mcp.tool()
async def diagram_generate(
    description: dict,
    output_path: Optional[str] = None,
    format: str = "drawio-svg",
) -> str:
    """
    Compile a JSON graph description into a draw.io diagram.

    The description has nodes (id, label, type, group, style, position,
    size), edges (from, to, label, routing), groups (id, label, parent),
    plus optional title, theme and layout settings.

    Args:
        description: The diagram description object
        output_path: Where to write the file; the suffix (.drawio.svg or
            .drawio) picks the format. If omitted the document is returned.
        format: "drawio-svg" (default) or "drawio" when no suffix decides

    Returns:
        JSON with the output path (or document), warnings and a summary,
        or the list of input errors
    """
    checked = validate_description(description)
    if not checked.ok:
        return json.dumps({"success": False, "errors": checked.errors}, indent=2)

    result = await compile_diagram(checked.diagram)
    if not result.validation.valid:
        return json.dumps({
            "success": False,
            "errors": [f"Internal error: {e}" for e in result.validation.errors],
        }, indent=2)

    if output_path and output_path.endswith(".drawio.svg"):
        format = "drawio-svg"
    elif output_path and output_path.endswith(".drawio"):
        format = "drawio"

    response = {
        "success": True,
        "format": format,
        "warnings": result.warnings,
        "summary": summarize_model(result.model).to_dict(),
    }
    if output_path:
        Path(output_path).write_text(result.output(format), encoding="utf-8")
        response["output"] = output_path
    else:
        response["document"] = result.output(format)
    return json.dumps(response, indent=2)


@mcp.tool()
def diagram_validate(xml: Optional[str] = None, file_path: Optional[str] = None) -> str:
    """
    Validate draw.io XML against common structural mistakes.

    Pass either the XML text or a path to a .drawio file.
    Returns JSON with valid, errors and warnings.
    """
    if xml is None:
        if not file_path:
            return json.dumps({"valid": False, "errors": ["Provide xml or file_path"], "warnings": []}, indent=2)
        xml = Path(file_path).read_text(encoding="utf-8")
    return json.dumps(validate_drawio_xml(xml).to_dict(), indent=2)


# ============================================================================
# REFERENCE TOOLS
# ============================================================================

@mcp.tool()
def diagram_list_shapes(category: Optional[str] = None) -> str:
    """
    List shape categories, or the shape type names in one category.

    Use the names as a node's "type" (e.g. "aws.lambda", "flowchart.decision").
    """
    if not category:
        return json.dumps({"categories": list_categories()}, indent=2)
    return json.dumps({"category": category, "shapes": sorted(list_shapes(category))}, indent=2)


@mcp.tool()
def diagram_list_themes() -> str:
    """List the built-in themes with their background colors and palettes."""
    return json.dumps({"themes": [t.to_dict() for t in list_themes()]}, indent=2)


def main():
    configure_logging()
    mcp.run()


if __name__ == "__main__":
    main()
