"""
Layout adapter - runs a layout engine over a GraphModel.

The model is converted to a nested container graph (groups contain their
member nodes and child groups, edges all sit at the root), the engine is
awaited once, and its parent-relative coordinates are accumulated back into
absolute positions.
"""

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Mapping, Optional, Union

from ..graph import DEFAULT_GROUP_SIZE, GraphGroup, GraphModel, GraphNode, Point, Size
from ..markup import format_number
from ..schema import LayoutAlgorithm, LayoutConfig
from .engine import (
    DEFAULT_ALGORITHM,
    DEFAULT_DIRECTION,
    OPT_ALGORITHM,
    OPT_DIRECTION,
    OPT_LAYER_SPACING,
    OPT_NODE_SPACING,
    OPT_NO_LAYOUT,
    OPT_PADDING,
    LayoutEngine,
    NestedLayoutEngine,
    Padding,
)

logger = logging.getLogger(__name__)

ALGORITHM_MAP: Mapping[str, str] = MappingProxyType({
    "hierarchical": "layered",
    "force": "force",
    "tree": "mrtree",
    "radial": "radial",
    "box": "rectpacking",
})

DIRECTION_MAP: Mapping[str, str] = MappingProxyType({
    "TB": "DOWN",
    "BT": "UP",
    "LR": "RIGHT",
    "RL": "LEFT",
})

ROOT_ID = "root"
GROUP_PADDING = "[top=40,left=20,bottom=20,right=20]"
FIT_TOLERANCE = 1e-6  # rounding noise from the engine's offsets


async def compute_layout(
    model: GraphModel,
    config: LayoutConfig,
    engine: Optional[LayoutEngine] = None,
) -> GraphModel:
    """
    Position every node and group that has no position yet.

    Args:
        model: The built graph model (not modified)
        config: Algorithm, direction and spacing
        engine: Layout engine to await; defaults to NestedLayoutEngine

    Returns:
        A new GraphModel with absolute positions; the same model when the
        algorithm is "none"
    """
    if config.algorithm == LayoutAlgorithm.NONE.value:
        return model

    graph = build_layout_graph(model, config)
    engine = engine or NestedLayoutEngine()
    logger.debug("Running %s layout on %d nodes", graph["layoutOptions"][OPT_ALGORITHM], len(model.nodes))
    result = await engine.layout(graph)
    return apply_layout(model, result)


def layout_options(config: LayoutConfig) -> dict[str, str]:
    """Translate our layout vocabulary into engine options."""
    return {
        OPT_ALGORITHM: ALGORITHM_MAP.get(str(config.algorithm), DEFAULT_ALGORITHM),
        OPT_DIRECTION: DIRECTION_MAP.get(str(config.direction), DEFAULT_DIRECTION),
        OPT_NODE_SPACING: format_number(config.spacing.node),
        OPT_LAYER_SPACING: format_number(config.spacing.layer),
    }


def build_layout_graph(model: GraphModel, config: LayoutConfig) -> dict:
    """
    Build the nested container graph handed to the engine.

    Element ids are cell ids as strings. Nodes with a position are pinned
    with noLayout so the engine keeps them but still accounts for them.
    """
    options = layout_options(config)
    members: dict[Optional[str], list[Union[GraphNode, GraphGroup]]] = {None: []}
    for group in model.groups:
        members.setdefault(group.id, [])
        members.setdefault(group.parent, []).append(group)
    for node in model.nodes:
        members.setdefault(node.group, []).append(node)

    def children_of(parent: Optional[str]) -> list[dict]:
        items = []
        for member in members.get(parent, []):
            if isinstance(member, GraphGroup):
                items.append(_group_element(member, children_of(member.id), options))
            else:
                items.append(_node_element(member))
        return items

    edges = [
        {
            "id": str(edge.cell_id),
            "sources": [str(edge.source_cell_id)],
            "targets": [str(edge.target_cell_id)],
        }
        for edge in model.edges
    ]

    return {
        "id": ROOT_ID,
        "children": children_of(None),
        "edges": edges,
        "layoutOptions": dict(options, **{"elk.edgeRouting": "ORTHOGONAL"}),
    }


def _node_element(node: GraphNode) -> dict:
    element = {
        "id": str(node.cell_id),
        "width": node.size.width,
        "height": node.size.height,
    }
    if node.position is not None:
        element["x"] = node.position.x
        element["y"] = node.position.y
        element["layoutOptions"] = {OPT_NO_LAYOUT: "true"}
    return element


def _group_element(group: GraphGroup, children: list[dict], options: dict) -> dict:
    element = {
        "id": str(group.cell_id),
        "children": children,
        "layoutOptions": dict(options, **{OPT_PADDING: GROUP_PADDING}),
    }
    if not children:
        width, height = DEFAULT_GROUP_SIZE
        element["width"] = width
        element["height"] = height
    return element


def collect_absolute(result: dict) -> tuple[dict[int, Point], dict[int, Size]]:
    """
    Walk the engine's output depth-first, accumulating parent offsets.

    Returns:
        (positions, sizes) keyed by cell id, in absolute coordinates
    """
    positions: dict[int, Point] = {}
    sizes: dict[int, Size] = {}

    def walk(element: dict, offset_x: float, offset_y: float) -> None:
        for child in element.get("children") or []:
            x = offset_x + float(child.get("x") or 0)
            y = offset_y + float(child.get("y") or 0)
            cell_id = int(child["id"])
            positions[cell_id] = Point(x, y)
            if child.get("width") is not None and child.get("height") is not None:
                sizes[cell_id] = Size(float(child["width"]), float(child["height"]))
            walk(child, x, y)

    walk(result, float(result.get("x") or 0), float(result.get("y") or 0))
    return positions, sizes


def apply_layout(model: GraphModel, result: dict) -> GraphModel:
    """Write absolute positions back. Existing node positions are never replaced."""
    positions, sizes = collect_absolute(result)

    nodes = []
    for node in model.nodes:
        position = positions.get(node.cell_id)
        if node.position is None and position is not None:
            node = replace(node, position=position)
        nodes.append(node)

    groups = []
    for group in model.groups:
        if group.cell_id in positions:
            group = replace(
                group,
                position=positions[group.cell_id],
                size=sizes.get(group.cell_id, group.size),
            )
        groups.append(group)

    return replace(model, nodes=nodes, groups=fit_groups(nodes, groups))


def fit_groups(nodes: list[GraphNode], groups: list[GraphGroup]) -> list[GraphGroup]:
    """
    Grow group boxes, innermost first, to cover every member.

    Computed members already sit inside their padding; this only changes
    groups holding hand-placed nodes, whose absolute positions the engine
    cannot know. Boxes never shrink.
    """
    padding = Padding.parse(GROUP_PADDING)
    by_id = {g.id: g for g in groups}

    def depth(group: GraphGroup) -> int:
        level = 0
        current = group
        while current.parent in by_id and level <= len(by_id):
            level += 1
            current = by_id[current.parent]
        return level

    for group in sorted(groups, key=depth, reverse=True):
        current = by_id[group.id]
        if current.position is None or current.size is None:
            continue
        members = [
            (n.position.x, n.position.y, n.size.width, n.size.height)
            for n in nodes if n.group == group.id and n.position is not None
        ]
        members += [
            (c.position.x, c.position.y, c.size.width, c.size.height)
            for c in by_id.values() if c.parent == group.id and c.position is not None and c.size is not None
        ]
        if not members:
            continue

        x, y = current.position.x, current.position.y
        right, bottom = x + current.size.width, y + current.size.height
        min_x = min(m[0] - padding.left for m in members)
        min_y = min(m[1] - padding.top for m in members)
        max_x = max(m[0] + m[2] + padding.right for m in members)
        max_y = max(m[1] + m[3] + padding.bottom for m in members)
        if min_x >= x - FIT_TOLERANCE and min_y >= y - FIT_TOLERANCE \
                and max_x <= right + FIT_TOLERANCE and max_y <= bottom + FIT_TOLERANCE:
            continue

        min_x, min_y = min(x, min_x), min(y, min_y)
        max_x, max_y = max(right, max_x), max(bottom, max_y)
        logger.debug("Grew group %s to cover its members", group.id)
        by_id[group.id] = replace(
            current,
            position=Point(min_x, min_y),
            size=Size(max_x - min_x, max_y - min_y),
        )

    return [by_id[g.id] for g in groups]
