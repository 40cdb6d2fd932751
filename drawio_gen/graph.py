"""
Internal graph model produced by the builder and consumed by layout,
encoder and renderer.

All positions stored here are absolute (one coordinate space for the whole
diagram). Cell ids are draw.io's numeric ids: 0 and 1 are reserved for the
root cell and the default layer, user entities start at 2.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .styles import StyleMap

ROOT_CELL_ID = 0
DEFAULT_LAYER_ID = 1
FIRST_USER_CELL_ID = 2

DEFAULT_NODE_SIZE = (120.0, 60.0)
DEFAULT_GROUP_SIZE = (200.0, 200.0)


@dataclass
class Point:
    x: float
    y: float


@dataclass
class Size:
    width: float
    height: float


@dataclass
class GraphNode:
    """A vertex. Only ``position`` changes after construction."""
    id: str
    cell_id: int
    label: str  # escaped for attribute embedding
    style: StyleMap
    group: Optional[str] = None
    position: Optional[Point] = None
    size: Size = field(default_factory=lambda: Size(*DEFAULT_NODE_SIZE))
    shape_type: str = ""  # declared type name, as given

    def center(self) -> Optional[tuple[float, float]]:
        """Get the center point, or None before layout."""
        if self.position is None:
            return None
        return (self.position.x + self.size.width / 2, self.position.y + self.size.height / 2)


@dataclass(frozen=True)
class GraphEdge:
    """A connector between two nodes and/or groups. Never repositioned."""
    cell_id: int
    source_id: str
    target_id: str
    source_cell_id: int
    target_cell_id: int
    label: str
    style: StyleMap


@dataclass
class GraphGroup:
    """A container. Position and size stay None until layout runs."""
    id: str
    cell_id: int
    label: str
    style: StyleMap
    parent: Optional[str] = None
    parent_cell_id: int = DEFAULT_LAYER_ID
    position: Optional[Point] = None
    size: Optional[Size] = None


@dataclass
class GraphModel:
    """
    The complete compiled graph.
    Owned by a single pipeline run; nothing keeps it afterwards.
    """
    title: str
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    groups: list[GraphGroup] = field(default_factory=list)
    background: str = "#ffffff"
    warnings: list[str] = field(default_factory=list)  # non-fatal builder diagnostics

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def get_group(self, group_id: str) -> Optional[GraphGroup]:
        for group in self.groups:
            if group.id == group_id:
                return group
        return None

    def get_entity(self, entity_id: str) -> Optional[Union[GraphNode, GraphGroup]]:
        """Find a node or group by its caller-supplied id (nodes win on clashes)."""
        return self.get_node(entity_id) or self.get_group(entity_id)

    def group_depth(self, group: GraphGroup) -> int:
        """Nesting depth of a group (0 for top-level groups)."""
        by_id = {g.id: g for g in self.groups}
        depth = 0
        current = group
        while current.parent is not None and current.parent in by_id:
            depth += 1
            current = by_id[current.parent]
            if depth > len(by_id):
                break
        return depth
