"""Automatic layout: engine boundary, bundled engine and model adapter."""

from .adapter import (
    ALGORITHM_MAP,
    DIRECTION_MAP,
    apply_layout,
    build_layout_graph,
    collect_absolute,
    compute_layout,
)
from .engine import LayoutEngine, LayoutError, NestedLayoutEngine

__all__ = [
    "ALGORITHM_MAP",
    "DIRECTION_MAP",
    "LayoutEngine",
    "LayoutError",
    "NestedLayoutEngine",
    "apply_layout",
    "build_layout_graph",
    "collect_absolute",
    "compute_layout",
]
