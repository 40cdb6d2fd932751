"""
Placement algorithms for the children of one container.

Provides the strategies used by the bundled layout engine:
- Layered: Sugiyama-style layers along the flow direction
- Tree: Breadth-first levels from the roots
- Force: Force-directed layout using spring physics
- Radial: Concentric rings around a root
- Pack: Row-based rectangle packing

All functions work on LayoutBox objects, modify the boxes in-place (top-left
x/y) and return the same list. Fixed boxes are never moved.
"""

import math
from collections import defaultdict
from dataclasses import dataclass


@dataclass
class LayoutBox:
    """A rectangle to be placed."""
    id: str
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    fixed: bool = False  # keep x/y as given

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


Link = tuple[str, str]

DEFAULT_NODE_SPACING = 50
DEFAULT_LAYER_SPACING = 80


def _movable(boxes: list[LayoutBox]) -> list[LayoutBox]:
    return [b for b in boxes if not b.fixed]


def _adjacency(boxes: list[LayoutBox], links: list[Link]) -> tuple[dict[str, list[str]], set[str]]:
    """Children lists (in link order) and the set of ids that have a parent."""
    ids = {b.id for b in boxes}
    children: dict[str, list[str]] = {b.id: [] for b in boxes}
    has_parent: set[str] = set()
    for source, target in links:
        if source in ids and target in ids and source != target:
            if target not in children[source]:
                children[source].append(target)
            has_parent.add(target)
    return children, has_parent


def assign_levels(boxes: list[LayoutBox], links: list[Link], longest_path: bool = False) -> dict[str, int]:
    """
    Assign a level (layer index) to every box.

    Nodes with no incoming links are roots at level 0; the rest get their
    breadth-first depth. With ``longest_path`` the levels are then pushed
    down so every forward link spans at least one level. Links that point
    back to an earlier-discovered node are ignored, which breaks cycles.
    """
    if not boxes:
        return {}

    children, has_parent = _adjacency(boxes, links)
    roots = [b.id for b in boxes if b.id not in has_parent] or [boxes[0].id]

    levels: dict[str, int] = {}
    order: dict[str, int] = {}
    queue = [(r, 0) for r in roots]
    pending = [b.id for b in boxes]

    while queue or pending:
        if not queue:
            # Disconnected or cycle-only component: start from its first node
            start = next((p for p in pending if p not in levels), None)
            pending = []
            if start is None:
                break
            queue = [(start, 0)]
            pending = [b.id for b in boxes if b.id not in levels and b.id != start]
        node_id, level = queue.pop(0)
        if node_id in levels:
            continue
        levels[node_id] = level
        order[node_id] = len(order)
        for child in children.get(node_id, []):
            queue.append((child, level + 1))

    if longest_path:
        forward = [
            (s, t) for s, t in links
            if s in order and t in order and order[s] < order[t]
        ]
        for _ in range(len(boxes)):
            changed = False
            for source, target in forward:
                if levels[target] <= levels[source]:
                    levels[target] = levels[source] + 1
                    changed = True
            if not changed:
                break

    return levels


def layered_layout(
    boxes: list[LayoutBox],
    links: list[Link],
    direction: str = "DOWN",
    node_spacing: float = DEFAULT_NODE_SPACING,
    layer_spacing: float = DEFAULT_LAYER_SPACING,
    longest_path: bool = True,
) -> list[LayoutBox]:
    """
    Arrange boxes in layers along the flow direction.

    Args:
        boxes: Boxes to arrange
        links: (source, target) pairs between box ids
        direction: DOWN, UP, RIGHT or LEFT
        node_spacing: Gap between neighbours within a layer
        layer_spacing: Gap between consecutive layers
        longest_path: Push targets below all their sources (layered) instead
            of using plain breadth-first depth (tree)

    Returns:
        The same list of boxes (modified in-place)
    """
    movable = _movable(boxes)
    if not movable:
        return boxes

    levels = assign_levels(movable, links, longest_path=longest_path)
    layers: dict[int, list[LayoutBox]] = defaultdict(list)
    for box in movable:
        layers[levels[box.id]].append(box)

    _order_by_barycenter(layers, links)

    horizontal = direction in ("RIGHT", "LEFT")

    def along(b: LayoutBox) -> float:  # extent along the flow
        return b.width if horizontal else b.height

    def across(b: LayoutBox) -> float:  # extent within a layer
        return b.height if horizontal else b.width

    layer_indexes = sorted(layers)
    widths = {
        i: sum(across(b) for b in layers[i]) + node_spacing * (len(layers[i]) - 1)
        for i in layer_indexes
    }
    widest = max(widths.values())

    flow = 0.0
    for i in layer_indexes:
        thickness = max(along(b) for b in layers[i])
        offset = (widest - widths[i]) / 2
        for box in layers[i]:
            main = flow + (thickness - along(box)) / 2
            if horizontal:
                box.x, box.y = main, offset
            else:
                box.x, box.y = offset, main
            offset += across(box) + node_spacing
        flow += thickness + layer_spacing

    if direction == "UP":
        _mirror(movable, axis="y")
    elif direction == "LEFT":
        _mirror(movable, axis="x")
    return boxes


def tree_layout(
    boxes: list[LayoutBox],
    links: list[Link],
    direction: str = "DOWN",
    node_spacing: float = DEFAULT_NODE_SPACING,
    layer_spacing: float = DEFAULT_LAYER_SPACING,
) -> list[LayoutBox]:
    """
    Arrange boxes in a hierarchical tree based on link directions.

    Nodes with no incoming links are placed at the root level and children
    one level below the parent that discovered them first.
    """
    return layered_layout(
        boxes, links, direction, node_spacing, layer_spacing, longest_path=False
    )


def _order_by_barycenter(layers: dict[int, list[LayoutBox]], links: list[Link]) -> None:
    """Reorder each layer by the average slot of its predecessors (one sweep)."""
    predecessors: dict[str, list[str]] = defaultdict(list)
    for source, target in links:
        predecessors[target].append(source)

    slots: dict[str, int] = {}
    for i in sorted(layers):
        layer = layers[i]
        if slots:
            def key(item: tuple[int, LayoutBox]) -> tuple[float, int]:
                index, box = item
                placed = [slots[p] for p in predecessors.get(box.id, []) if p in slots]
                return (sum(placed) / len(placed) if placed else float(index), index)
            layer[:] = [box for _, box in sorted(enumerate(layer), key=key)]
        for slot, box in enumerate(layer):
            slots[box.id] = slot


def _mirror(boxes: list[LayoutBox], axis: str) -> None:
    if axis == "y":
        extent = max(b.y + b.height for b in boxes)
        for b in boxes:
            b.y = extent - b.y - b.height
    else:
        extent = max(b.x + b.width for b in boxes)
        for b in boxes:
            b.x = extent - b.x - b.width


def force_layout(
    boxes: list[LayoutBox],
    links: list[Link],
    node_spacing: float = DEFAULT_NODE_SPACING,
    iterations: int = 100,
    attraction: float = 0.01,
    damping: float = 0.1,
) -> list[LayoutBox]:
    """
    Arrange boxes using a force-directed layout algorithm.

    Simulates physical forces on box centers:
    - All boxes repel each other (like charged particles)
    - Linked boxes attract each other (like springs)

    Starts from a circle so the result is deterministic, then pushes any
    remaining overlaps apart.
    """
    movable = _movable(boxes)
    if not movable:
        return boxes
    if len(movable) == 1:
        movable[0].x = movable[0].y = 0.0
        return boxes

    by_id = {b.id: b for b in movable}
    extent = max(max(b.width, b.height) for b in movable) + node_spacing
    min_distance = extent
    repulsion = extent * extent * 10

    # Initialize with circular layout for better starting positions
    radius = max(200.0, len(movable) * extent / (2 * math.pi))
    centers: dict[str, list[float]] = {}
    for i, box in enumerate(movable):
        angle = 2 * math.pi * i / len(movable)
        centers[box.id] = [radius * math.cos(angle), radius * math.sin(angle)]

    for _ in range(iterations):
        forces: dict[str, list[float]] = {b.id: [0.0, 0.0] for b in movable}

        # Repulsion between all pairs (Coulomb's law)
        for i, n1 in enumerate(movable):
            for n2 in movable[i + 1:]:
                dx = centers[n1.id][0] - centers[n2.id][0]
                dy = centers[n1.id][1] - centers[n2.id][1]
                dist = max(min_distance, math.hypot(dx, dy))
                force = repulsion / (dist * dist)
                fx, fy = force * dx / dist, force * dy / dist
                forces[n1.id][0] += fx
                forces[n1.id][1] += fy
                forces[n2.id][0] -= fx
                forces[n2.id][1] -= fy

        # Attraction along links (Hooke's law)
        for source, target in links:
            if source not in by_id or target not in by_id or source == target:
                continue
            dx = centers[target][0] - centers[source][0]
            dy = centers[target][1] - centers[source][1]
            dist = max(min_distance, math.hypot(dx, dy))
            force = dist * attraction
            fx, fy = force * dx / dist, force * dy / dist
            forces[source][0] += fx
            forces[source][1] += fy
            forces[target][0] -= fx
            forces[target][1] -= fy

        for box in movable:
            centers[box.id][0] += forces[box.id][0] * damping
            centers[box.id][1] += forces[box.id][1] * damping

    for box in movable:
        box.x = centers[box.id][0] - box.width / 2
        box.y = centers[box.id][1] - box.height / 2

    separate_overlaps(movable, node_spacing)
    return boxes


def overlaps(a: LayoutBox, b: LayoutBox) -> bool:
    return (
        a.x < b.x + b.width and b.x < a.x + a.width
        and a.y < b.y + b.height and b.y < a.y + a.height
    )


def clear_fixed(
    boxes: list[LayoutBox],
    spacing: float = DEFAULT_NODE_SPACING,
    horizontal: bool = False,
) -> list[LayoutBox]:
    """
    Move the placed boxes past the fixed ones when any of them collide.

    The movable boxes shift together, so their arrangement is kept; the shift
    runs along x for horizontal flows and along y otherwise.
    """
    movable = _movable(boxes)
    fixed = [b for b in boxes if b.fixed]
    if not any(overlaps(m, f) for m in movable for f in fixed):
        return boxes

    if horizontal:
        shift = max(f.x + f.width for f in fixed) + spacing - min(m.x for m in movable)
        for box in movable:
            box.x += shift
    else:
        shift = max(f.y + f.height for f in fixed) + spacing - min(m.y for m in movable)
        for box in movable:
            box.y += shift
    return boxes


def separate_overlaps(boxes: list[LayoutBox], spacing: float = 0, passes: int = 50) -> list[LayoutBox]:
    """Push overlapping boxes apart along the axis of least penetration."""
    for _ in range(passes):
        moved = False
        for i, a in enumerate(boxes):
            for b in boxes[i + 1:]:
                ax, ay = a.center
                bx, by = b.center
                overlap_x = (a.width + b.width) / 2 + spacing - abs(ax - bx)
                overlap_y = (a.height + b.height) / 2 + spacing - abs(ay - by)
                if overlap_x <= 0 or overlap_y <= 0:
                    continue
                moved = True
                if overlap_x < overlap_y:
                    shift = overlap_x / 2 * (1 if ax >= bx else -1)
                    a.x += shift
                    b.x -= shift
                else:
                    shift = overlap_y / 2 * (1 if ay >= by else -1)
                    a.y += shift
                    b.y -= shift
        if not moved:
            break
    return boxes


def radial_layout(
    boxes: list[LayoutBox],
    links: list[Link],
    node_spacing: float = DEFAULT_NODE_SPACING,
    layer_spacing: float = DEFAULT_LAYER_SPACING,
) -> list[LayoutBox]:
    """
    Place the root at the center and each breadth-first level on a ring.

    Ring radii grow by the largest box extent plus ``layer_spacing`` and are
    widened when a ring would be too crowded for its boxes.
    """
    movable = _movable(boxes)
    if not movable:
        return boxes

    levels = assign_levels(movable, links)
    rings: dict[int, list[LayoutBox]] = defaultdict(list)
    for box in movable:
        rings[levels[box.id]].append(box)

    extent = max(math.hypot(b.width, b.height) for b in movable)
    radius = 0.0
    for level in sorted(rings):
        ring = rings[level]
        if level == 0 and len(ring) == 1:
            box = ring[0]
            box.x, box.y = -box.width / 2, -box.height / 2
            continue
        radius = max(
            radius + extent + layer_spacing,
            len(ring) * (extent + node_spacing) / (2 * math.pi),
        )
        for i, box in enumerate(ring):
            angle = 2 * math.pi * i / len(ring) - math.pi / 2
            box.x = radius * math.cos(angle) - box.width / 2
            box.y = radius * math.sin(angle) - box.height / 2
    return boxes


def pack_layout(
    boxes: list[LayoutBox],
    node_spacing: float = DEFAULT_NODE_SPACING,
) -> list[LayoutBox]:
    """
    Pack boxes tightly using a simple row-based bin-packing algorithm.

    Boxes are sorted by area (largest first) and rows wrap at a width chosen
    to keep the result roughly square.
    """
    movable = _movable(boxes)
    if not movable:
        return boxes

    sorted_boxes = sorted(movable, key=lambda b: b.width * b.height, reverse=True)
    total_area = sum((b.width + node_spacing) * (b.height + node_spacing) for b in sorted_boxes)
    max_width = max(max(b.width for b in sorted_boxes), math.sqrt(total_area))

    current_x = 0.0
    current_y = 0.0
    row_height = 0.0
    for box in sorted_boxes:
        if current_x + box.width > max_width and current_x > 0:
            current_x = 0.0
            current_y += row_height + node_spacing
            row_height = 0.0
        box.x = current_x
        box.y = current_y
        current_x += box.width + node_spacing
        row_height = max(row_height, box.height)

    return boxes
