"""Shape tables and lookup helpers."""

from .registry import (
    SHAPES,
    levenshtein,
    list_categories,
    list_shapes,
    resolve_shape_style,
    suggest_shape,
)

__all__ = [
    "SHAPES",
    "levenshtein",
    "list_categories",
    "list_shapes",
    "resolve_shape_style",
    "suggest_shape",
]
