"""
Model analysis - structure summaries for compiled diagrams.

Used by the CLI's --json output and the HTTP/MCP generate responses to
describe what was built.
"""

from collections import defaultdict
from dataclasses import dataclass, field

from .graph import GraphModel


@dataclass
class ConnectedComponent:
    """A connected component in the diagram graph."""
    node_ids: list[str] = field(default_factory=list)
    edge_count: int = 0

    @property
    def size(self) -> int:
        return len(self.node_ids)


@dataclass
class ModelSummary:
    """Complete summary of a compiled model's structure."""
    title: str
    total_nodes: int
    total_edges: int
    total_groups: int
    nodes_by_category: dict[str, int]
    connected_components: int
    orphan_node_ids: list[str]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "total_groups": self.total_groups,
            "nodes_by_category": self.nodes_by_category,
            "connected_components": self.connected_components,
            "orphan_node_ids": self.orphan_node_ids,
        }


def find_connected_components(model: GraphModel) -> list[ConnectedComponent]:
    """
    Find all connected components among the model's nodes using BFS.

    Edges are treated as undirected; edges touching a group are ignored.

    Args:
        model: The model to analyze

    Returns:
        List of ConnectedComponent objects, in node order of first member
    """
    if not model.nodes:
        return []

    node_ids = [n.id for n in model.nodes]

    # Build adjacency list (undirected)
    adjacency: dict[str, set[str]] = {nid: set() for nid in node_ids}
    edge_counts: dict[str, int] = defaultdict(int)
    for edge in model.edges:
        if edge.source_id in adjacency and edge.target_id in adjacency:
            adjacency[edge.source_id].add(edge.target_id)
            adjacency[edge.target_id].add(edge.source_id)
            edge_counts[edge.source_id] += 1

    visited: set[str] = set()
    components: list[ConnectedComponent] = []

    for start_node in node_ids:
        if start_node in visited:
            continue

        component_nodes: list[str] = []
        queue = [start_node]
        while queue:
            current = queue.pop(0)
            if current in visited:
                continue
            visited.add(current)
            component_nodes.append(current)
            for neighbor in sorted(adjacency[current]):
                if neighbor not in visited:
                    queue.append(neighbor)

        components.append(ConnectedComponent(
            node_ids=component_nodes,
            edge_count=sum(edge_counts[n] for n in component_nodes),
        ))

    return components


def node_category(shape_type: str) -> str:
    """Category part of a shape type name ("aws.lambda" -> "aws")."""
    if not shape_type:
        return "unknown"
    if "." in shape_type and "=" not in shape_type and ";" not in shape_type:
        return shape_type.split(".", 1)[0]
    return "custom"


def summarize_model(model: GraphModel) -> ModelSummary:
    """
    Generate a summary of a compiled model.

    Args:
        model: The model to summarize

    Returns:
        ModelSummary object with all analysis results
    """
    category_counts: dict[str, int] = defaultdict(int)
    for node in model.nodes:
        category_counts[node_category(node.shape_type)] += 1

    connected: set[str] = set()
    for edge in model.edges:
        connected.add(edge.source_id)
        connected.add(edge.target_id)

    return ModelSummary(
        title=model.title,
        total_nodes=len(model.nodes),
        total_edges=len(model.edges),
        total_groups=len(model.groups),
        nodes_by_category=dict(category_counts),
        connected_components=len(find_connected_components(model)),
        orphan_node_ids=[n.id for n in model.nodes if n.id not in connected],
    )
