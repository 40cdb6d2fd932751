"""
Format encoder - serializes a GraphModel into draw.io XML (mxfile).

Output order is fixed: the two foundation cells, then groups, then nodes,
then edges, so every parent/source/target id is defined above its first
reference.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .config import MXFILE_HOST
from .graph import DEFAULT_GROUP_SIZE, DEFAULT_LAYER_ID, ROOT_CELL_ID, GraphEdge, GraphGroup, GraphModel, GraphNode
from .markup import escape_attr, format_number

logger = logging.getLogger(__name__)

GRAPH_MODEL_ATTRS = (
    'dx="1422" dy="794" grid="1" gridSize="10" guides="1" tooltips="1" connect="1" '
    'arrows="1" fold="1" page="1" pageScale="1" pageWidth="1100" pageHeight="850" '
    'math="0" shadow="0"'
)


def generate_xml(model: GraphModel, modified: Optional[datetime] = None) -> str:
    """
    Encode a model as an uncompressed .drawio document.

    Args:
        model: Graph model, laid out or not
        modified: Timestamp for the mxfile ``modified`` attribute (default: now)

    Returns:
        The XML document as a string
    """
    timestamp = (modified or datetime.now(timezone.utc)).isoformat(timespec="milliseconds")
    groups_by_id = {g.id: g for g in model.groups}

    lines = [
        f'<mxfile host="{MXFILE_HOST}" modified="{escape_attr(timestamp)}" type="device">',
        f'  <diagram name="{escape_attr(model.title)}" id="diagram-1">',
        f'    <mxGraphModel {GRAPH_MODEL_ATTRS} background="{escape_attr(model.background)}">',
        "      <root>",
        # Foundation cells (required by draw.io)
        f'        <mxCell id="{ROOT_CELL_ID}"/>',
        f'        <mxCell id="{DEFAULT_LAYER_ID}" parent="{ROOT_CELL_ID}"/>',
    ]

    # Groups first (containers must exist before their children)
    for group in model.groups:
        lines.extend(group_cell(group, groups_by_id.get(group.parent) if group.parent else None))

    for node in model.nodes:
        lines.extend(node_cell(node, groups_by_id.get(node.group) if node.group else None))

    # Edges last (source/target must exist)
    for edge in model.edges:
        lines.extend(edge_cell(edge))

    lines += [
        "      </root>",
        "    </mxGraphModel>",
        "  </diagram>",
        "</mxfile>",
    ]
    logger.debug("Encoded %d cells", 2 + len(model.groups) + len(model.nodes) + len(model.edges))
    return "\n".join(lines)


def _geometry(x: float, y: float, width: float, height: float) -> str:
    return (
        f'          <mxGeometry x="{format_number(x)}" y="{format_number(y)}" '
        f'width="{format_number(width)}" height="{format_number(height)}" as="geometry"/>'
    )


def group_cell(group: GraphGroup, parent: Optional[GraphGroup] = None) -> list[str]:
    """A container cell; geometry is relative to the parent group, if any."""
    if group.position is None or group.size is None:
        # No layout ran: keep a default box
        x, y = 0.0, 0.0
        width, height = DEFAULT_GROUP_SIZE
    else:
        x, y = group.position.x, group.position.y
        if parent is not None and parent.position is not None:
            x -= parent.position.x
            y -= parent.position.y
        width, height = group.size.width, group.size.height

    return [
        f'        <mxCell id="{group.cell_id}" value="{escape_attr(group.label)}" '
        f'style="{escape_attr(group.style.serialize())}" vertex="1" parent="{group.parent_cell_id}">',
        _geometry(x, y, width, height),
        "        </mxCell>",
    ]


def node_cell(node: GraphNode, group: Optional[GraphGroup] = None) -> list[str]:
    """A vertex cell; geometry is relative to its group when grouped."""
    parent_cell_id = group.cell_id if group is not None else DEFAULT_LAYER_ID
    x = node.position.x if node.position else 0.0
    y = node.position.y if node.position else 0.0
    if group is not None and group.position is not None and node.position is not None:
        x -= group.position.x
        y -= group.position.y

    return [
        f'        <mxCell id="{node.cell_id}" value="{escape_attr(node.label)}" '
        f'style="{escape_attr(node.style.serialize())}" vertex="1" parent="{parent_cell_id}">',
        _geometry(x, y, node.size.width, node.size.height),
        "        </mxCell>",
    ]


def edge_cell(edge: GraphEdge) -> list[str]:
    """A connector cell; geometry is relative (no coordinates)."""
    value = f' value="{escape_attr(edge.label)}"' if edge.label else ""
    return [
        f'        <mxCell id="{edge.cell_id}"{value} style="{escape_attr(edge.style.serialize())}" '
        f'edge="1" source="{edge.source_cell_id}" target="{edge.target_cell_id}" parent="{DEFAULT_LAYER_ID}">',
        '          <mxGeometry relative="1" as="geometry"/>',
        "        </mxCell>",
    ]
