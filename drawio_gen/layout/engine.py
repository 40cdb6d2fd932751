"""
Layout engine boundary and the bundled nested-container engine.

Engines take an ELK-style JSON graph:

    {"id": "root", "children": [...], "edges": [...], "layoutOptions": {...}}

where each child is ``{"id", "width", "height", "x"?, "y"?, "children"?,
"layoutOptions"?}`` and each edge is ``{"id", "sources": [...],
"targets": [...]}``. They return a tree of the same shape with ``x``/``y``
filled in, relative to the immediate parent container.
"""

import asyncio
import copy
import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol

from .algorithms import (
    DEFAULT_LAYER_SPACING,
    DEFAULT_NODE_SPACING,
    LayoutBox,
    clear_fixed,
    force_layout,
    layered_layout,
    pack_layout,
    radial_layout,
    tree_layout,
)

logger = logging.getLogger(__name__)

OPT_ALGORITHM = "elk.algorithm"
OPT_DIRECTION = "elk.direction"
OPT_NODE_SPACING = "elk.spacing.nodeNode"
OPT_LAYER_SPACING = "elk.layered.spacing.nodeNodeBetweenLayers"
OPT_PADDING = "elk.padding"
OPT_NO_LAYOUT = "org.eclipse.elk.noLayout"

DEFAULT_ALGORITHM = "layered"
DEFAULT_DIRECTION = "DOWN"
DEFAULT_PADDING = "[top=12,left=12,bottom=12,right=12]"

# Options a container passes on to nested containers that don't set them
INHERITED_OPTIONS = (OPT_ALGORITHM, OPT_DIRECTION, OPT_NODE_SPACING, OPT_LAYER_SPACING)

_PADDING_RE = re.compile(r"(top|left|bottom|right)\s*=\s*(-?[0-9.]+)")


class LayoutEngine(Protocol):
    """Anything that can position an ELK-style container graph."""

    async def layout(self, graph: dict) -> dict:
        ...


class LayoutError(ValueError):
    """Raised when a layout graph cannot be processed."""


@dataclass
class Padding:
    top: float = 12
    left: float = 12
    bottom: float = 12
    right: float = 12

    @classmethod
    def parse(cls, text: Optional[str]) -> "Padding":
        """Parse ELK's ``[top=40,left=20,bottom=20,right=20]`` notation."""
        padding = cls()
        for side, value in _PADDING_RE.findall(text or DEFAULT_PADDING):
            setattr(padding, side, float(value))
        return padding


def option(options: dict, key: str, default=None):
    """Read an ELK option by its short or fully qualified (org.eclipse.) key."""
    if key in options:
        return options[key]
    if key.startswith("elk."):
        return options.get("org.eclipse." + key, default)
    if key.startswith("org.eclipse."):
        return options.get(key[len("org.eclipse."):], default)
    return default


def _is_pinned(item: dict) -> bool:
    value = option(item.get("layoutOptions") or {}, OPT_NO_LAYOUT, False)
    return str(value).lower() == "true"


class NestedLayoutEngine:
    """
    Lays out nested containers bottom-up.

    Child containers are laid out first so their sizes are known, then each
    container's direct children are placed with the container's algorithm.
    Edges between descendants are lifted onto the direct children that
    contain their endpoints.
    """

    def __init__(self, root_padding: str = DEFAULT_PADDING):
        self.root_padding = root_padding

    async def layout(self, graph: dict) -> dict:
        return await asyncio.to_thread(self.layout_sync, graph)

    def layout_sync(self, graph: dict) -> dict:
        """Lay out a copy of ``graph`` and return it."""
        if not isinstance(graph, dict) or "id" not in graph:
            raise LayoutError("Layout graph must be an object with an 'id'")

        result = copy.deepcopy(graph)
        parents: dict[str, str] = {}
        links: list[tuple[str, str]] = []
        self._index(result, parents, links)

        options = dict(result.get("layoutOptions") or {})
        options.setdefault(OPT_PADDING, self.root_padding)
        result.setdefault("x", 0)
        result.setdefault("y", 0)
        self._layout_container(result, options, parents, links)
        logger.debug("Laid out %d elements, %d edges", len(parents), len(links))
        return result

    def _index(self, container: dict, parents: dict[str, str], links: list[tuple[str, str]]) -> None:
        """Record each element's container and collect edges from every level."""
        for edge in container.get("edges") or []:
            for source in edge.get("sources") or []:
                for target in edge.get("targets") or []:
                    links.append((str(source), str(target)))
        for child in container.get("children") or []:
            child_id = str(child["id"])
            if child_id in parents:
                raise LayoutError(f"Duplicate layout element id: {child_id}")
            parents[child_id] = str(container["id"])
            self._index(child, parents, links)

    def _layout_container(
        self,
        container: dict,
        options: dict,
        parents: dict[str, str],
        links: list[tuple[str, str]],
    ) -> None:
        children = container.get("children") or []
        if not children:
            # Keep the declared size of an empty container
            container.setdefault("width", 0)
            container.setdefault("height", 0)
            return

        for child in children:
            if child.get("children"):
                child_options = dict(child.get("layoutOptions") or {})
                for key in INHERITED_OPTIONS:
                    if option(child_options, key) is None and option(options, key) is not None:
                        child_options[key] = option(options, key)
                self._layout_container(child, child_options, parents, links)

        boxes = []
        for child in children:
            pinned = _is_pinned(child)
            boxes.append(LayoutBox(
                id=str(child["id"]),
                width=float(child.get("width") or 0),
                height=float(child.get("height") or 0),
                x=float(child.get("x") or 0) if pinned else 0.0,
                y=float(child.get("y") or 0) if pinned else 0.0,
                fixed=pinned,
            ))

        container_id = str(container["id"])
        local_links = self._lift_links(container_id, {b.id for b in boxes}, parents, links)
        self._place(boxes, local_links, options)

        padding = Padding.parse(option(options, OPT_PADDING))
        movable = [b for b in boxes if not b.fixed]
        if movable:
            shift_x = padding.left - min(b.x for b in movable)
            shift_y = padding.top - min(b.y for b in movable)
            for box in movable:
                box.x += shift_x
                box.y += shift_y
            direction = str(option(options, OPT_DIRECTION, DEFAULT_DIRECTION)).upper()
            clear_fixed(
                boxes,
                float(option(options, OPT_NODE_SPACING, DEFAULT_NODE_SPACING)),
                horizontal=direction in ("RIGHT", "LEFT"),
            )

        for child, box in zip(children, boxes):
            child["x"] = box.x
            child["y"] = box.y
            child["width"] = box.width
            child["height"] = box.height

        container["width"] = max(b.x + b.width for b in boxes) + padding.right
        container["height"] = max(b.y + b.height for b in boxes) + padding.bottom

    @staticmethod
    def _lift_links(
        container_id: str,
        child_ids: set[str],
        parents: dict[str, str],
        links: list[tuple[str, str]],
    ) -> list[tuple[str, str]]:
        """Map edges onto the direct children of a container."""

        def direct_child(element_id: str) -> Optional[str]:
            current = element_id
            seen = set()
            while current in parents and current not in seen:
                seen.add(current)
                if parents[current] == container_id:
                    return current
                current = parents[current]
            return None

        lifted = []
        for source, target in links:
            s, t = direct_child(source), direct_child(target)
            if s is not None and t is not None and s != t and s in child_ids and t in child_ids:
                if (s, t) not in lifted:
                    lifted.append((s, t))
        return lifted

    @staticmethod
    def _place(boxes: list[LayoutBox], links: list[tuple[str, str]], options: dict) -> None:
        algorithm = str(option(options, OPT_ALGORITHM, DEFAULT_ALGORITHM))
        algorithm = algorithm.rsplit(".", 1)[-1]  # org.eclipse.elk.layered -> layered
        direction = str(option(options, OPT_DIRECTION, DEFAULT_DIRECTION)).upper()
        node_spacing = float(option(options, OPT_NODE_SPACING, DEFAULT_NODE_SPACING))
        layer_spacing = float(option(options, OPT_LAYER_SPACING, DEFAULT_LAYER_SPACING))

        if algorithm == "mrtree":
            tree_layout(boxes, links, direction, node_spacing, layer_spacing)
        elif algorithm == "force":
            force_layout(boxes, links, node_spacing)
        elif algorithm in ("radial", "radialTree"):
            radial_layout(boxes, links, node_spacing, layer_spacing)
        elif algorithm == "rectpacking":
            pack_layout(boxes, node_spacing)
        else:
            if algorithm != DEFAULT_ALGORITHM:
                logger.warning("Unknown layout algorithm %r, using %s", algorithm, DEFAULT_ALGORITHM)
            layered_layout(boxes, links, direction, node_spacing, layer_spacing)
