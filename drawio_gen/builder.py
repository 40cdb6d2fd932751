"""
Model builder - turns a validated description into a GraphModel.

Cell ids are handed out in a fixed order: all groups, then all nodes, then
all edges, starting after the two reserved foundation ids. Groups are
numbered before any group is built, so nested groups can always resolve
their parent's cell id regardless of description order.
"""

import logging
from typing import Mapping, Optional

from .graph import (
    DEFAULT_LAYER_ID,
    DEFAULT_NODE_SIZE,
    FIRST_USER_CELL_ID,
    GraphEdge,
    GraphGroup,
    GraphModel,
    GraphNode,
    Point,
    Size,
)
from .markup import escape_xml
from .schema import DiagramDescription, Routing, StyleOverride
from .shapes import SHAPES, resolve_shape_style, suggest_shape
from .styles import StyleMap
from .themes import THEMES, Theme, get_theme

logger = logging.getLogger(__name__)

DEFAULT_NODE_STYLE = "rounded=1;whiteSpace=wrap;html=1;"


def build_graph(
    diagram: DiagramDescription,
    shapes: Mapping[str, str] = SHAPES,
    themes: Mapping[str, Theme] = THEMES,
) -> GraphModel:
    """
    Build the internal graph model.

    Args:
        diagram: A validated description (see schema.validate_description)
        shapes: Shape name -> style string table
        themes: Theme name -> Theme table

    Returns:
        A GraphModel; never raises for unknown shape types
    """
    theme = get_theme(diagram.theme, themes)
    warnings: list[str] = []
    next_cell_id = FIRST_USER_CELL_ID

    # Number every group before building any of them
    group_cell_ids: dict[str, int] = {}
    for group in diagram.groups:
        group_cell_ids[group.id] = next_cell_id
        next_cell_id += 1

    groups: list[GraphGroup] = []
    for group in diagram.groups:
        parent_cell_id = group_cell_ids[group.parent] if group.parent else DEFAULT_LAYER_ID
        groups.append(GraphGroup(
            id=group.id,
            cell_id=group_cell_ids[group.id],
            label=escape_xml(group.label),
            style=build_group_style(theme, group.style),
            parent=group.parent,
            parent_cell_id=parent_cell_id,
        ))

    node_cell_ids: dict[str, int] = {}
    nodes: list[GraphNode] = []
    for node in diagram.nodes:
        node_cell_ids[node.id] = next_cell_id
        style, warning = build_node_style(node.type, theme, node.style, shapes)
        if warning:
            warnings.append(f'Node "{node.id}": {warning}')
        nodes.append(GraphNode(
            id=node.id,
            cell_id=next_cell_id,
            label=escape_xml(node.label),
            style=style,
            group=node.group,
            position=Point(node.position.x, node.position.y) if node.position else None,
            size=Size(node.size.width, node.size.height) if node.size else Size(*DEFAULT_NODE_SIZE),
            shape_type=node.type,
        ))
        next_cell_id += 1

    edges: list[GraphEdge] = []
    for edge in diagram.edges:
        edges.append(GraphEdge(
            cell_id=next_cell_id,
            source_id=edge.from_,
            target_id=edge.to,
            source_cell_id=_resolve_endpoint(edge.from_, node_cell_ids, group_cell_ids),
            target_cell_id=_resolve_endpoint(edge.to, node_cell_ids, group_cell_ids),
            label=escape_xml(edge.label or ""),
            style=build_edge_style(edge.routing, theme, edge.style),
        ))
        next_cell_id += 1

    logger.debug(
        "Built graph %r: %d groups, %d nodes, %d edges",
        diagram.title, len(groups), len(nodes), len(edges),
    )
    return GraphModel(
        title=diagram.title,
        nodes=nodes,
        edges=edges,
        groups=groups,
        background=theme.background,
        warnings=warnings,
    )


def _resolve_endpoint(entity_id: str, node_cell_ids: dict[str, int], group_cell_ids: dict[str, int]) -> int:
    if entity_id in node_cell_ids:
        return node_cell_ids[entity_id]
    return group_cell_ids[entity_id]


def build_node_style(
    type_name: str,
    theme: Theme,
    overrides: Optional[StyleOverride] = None,
    shapes: Mapping[str, str] = SHAPES,
) -> tuple[StyleMap, Optional[str]]:
    """
    Resolve a node's style: shape table entry, then theme, then overrides.

    Unknown type names that look like raw draw.io styles (contain '=' or ';')
    are used verbatim. Anything else falls back to a rounded box.

    Returns:
        (style, warning) where warning is None unless the type was unknown
    """
    warning = None
    base = resolve_shape_style(type_name, shapes)
    if base is None:
        if "=" in type_name or ";" in type_name:
            base = type_name
        else:
            suggestion = suggest_shape(type_name, shapes)
            hint = f' Did you mean "{suggestion}"?' if suggestion else ""
            warning = f'Unknown shape type "{type_name}".{hint} Using default.'
            logger.warning(warning)
            base = DEFAULT_NODE_STYLE

    o = overrides or StyleOverride()
    style = StyleMap.parse(base)
    style.merge([
        ("fillColor", _pick(o.fill_color, theme.node.fill_color)),
        ("strokeColor", _pick(o.stroke_color, theme.node.stroke_color)),
        ("fontColor", _pick(o.font_color, theme.node.font_color)),
        ("fontSize", _pick(o.font_size, theme.node.font_size)),
        ("fontFamily", _pick(o.font_family, theme.node.font_family)),
    ])
    if o.rounded is not None:
        style.set("rounded", o.rounded)
    elif "rounded" in style:
        # Box-like shapes follow the theme's corner style
        style.set("rounded", theme.node.rounded)
    if o.shadow is not None or theme.node.shadow:
        style.set("shadow", _pick(o.shadow, theme.node.shadow))
    if o.dashed is not None:
        style.set("dashed", o.dashed)
    if o.opacity is not None:
        style.set("opacity", o.opacity)
    if o.stroke_width is not None:
        style.set("strokeWidth", o.stroke_width)
    return style, warning


def build_edge_style(
    routing: str,
    theme: Theme,
    overrides: Optional[StyleOverride] = None,
) -> StyleMap:
    """Edge style from routing mode, theme and overrides."""
    o = overrides or StyleOverride()
    style = StyleMap()
    if routing == Routing.ORTHOGONAL.value:
        style.merge([("edgeStyle", "orthogonalEdgeStyle"), ("rounded", True)])
    style.merge([
        ("html", True),
        ("strokeColor", _pick(o.stroke_color, theme.edge.stroke_color)),
        ("strokeWidth", _pick(o.stroke_width, theme.edge.stroke_width)),
        ("fontColor", _pick(o.font_color, theme.edge.font_color)),
        ("fontSize", _pick(o.font_size, theme.edge.font_size)),
    ])
    if o.dashed is not None:
        style.set("dashed", o.dashed)
    if o.opacity is not None:
        style.set("opacity", o.opacity)
    return style


def build_group_style(theme: Theme, overrides: Optional[StyleOverride] = None) -> StyleMap:
    """Container style: a rounded, non-collapsible box with a bold top label."""
    o = overrides or StyleOverride()
    style = StyleMap().merge([
        ("rounded", True),
        ("whiteSpace", "wrap"),
        ("html", True),
        ("container", True),
        ("collapsible", False),
        ("fillColor", _pick(o.fill_color, theme.group.fill_color)),
        ("strokeColor", _pick(o.stroke_color, theme.group.stroke_color)),
        ("fontColor", _pick(o.font_color, theme.group.font_color)),
        ("fontSize", _pick(o.font_size, theme.group.font_size)),
        ("dashed", _pick(o.dashed, theme.group.dashed)),
        ("verticalAlign", "top"),
        ("fontStyle", 1),
    ])
    if o.opacity is not None:
        style.set("opacity", o.opacity)
    return style


def _pick(override, default):
    return default if override is None else override
