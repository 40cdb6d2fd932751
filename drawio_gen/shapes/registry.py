"""
Shape registry - friendly type names to draw.io style strings.

Aggregates the per-category tables into one read-only mapping and provides
lookup, listing and fuzzy "did you mean" suggestions.
"""
from types import MappingProxyType
from typing import Mapping, Optional

from .aws import AWS_SHAPES
from .azure import AZURE_SHAPES
from .flowchart import FLOWCHART_SHAPES
from .gcp import GCP_SHAPES
from .network import NETWORK_SHAPES
from .uml import UML_SHAPES

SHAPES: Mapping[str, str] = MappingProxyType({
    **FLOWCHART_SHAPES,
    **AWS_SHAPES,
    **AZURE_SHAPES,
    **GCP_SHAPES,
    **UML_SHAPES,
    **NETWORK_SHAPES,
})

# Suggestions further away than this are not worth showing
SUGGESTION_MAX_DISTANCE = 3


def resolve_shape_style(type_name: str, shapes: Mapping[str, str] = SHAPES) -> Optional[str]:
    """Return the style string for a shape type, or None if unknown."""
    return shapes.get(type_name)


def suggest_shape(type_name: str, shapes: Mapping[str, str] = SHAPES) -> Optional[str]:
    """
    Find the closest known shape name by edit distance.

    Comparison is case-insensitive. Keys are scanned in sorted order and only
    a strictly better distance replaces the current best, so ties go to the
    lexicographically first key.

    Returns:
        The best key within SUGGESTION_MAX_DISTANCE, or None
    """
    lower = type_name.lower()
    best_match: Optional[str] = None
    best_score = SUGGESTION_MAX_DISTANCE + 1

    for key in sorted(shapes):
        distance = levenshtein(lower, key.lower())
        if distance < best_score:
            best_score = distance
            best_match = key

    return best_match


def list_shapes(category: Optional[str] = None, shapes: Mapping[str, str] = SHAPES) -> dict[str, str]:
    """All shapes, or only those in ``category`` (the part before the dot)."""
    if not category:
        return dict(shapes)
    prefix = category + "."
    return {key: value for key, value in shapes.items() if key.startswith(prefix)}


def list_categories(shapes: Mapping[str, str] = SHAPES) -> list[str]:
    categories = {key.split(".", 1)[0] for key in shapes if "." in key}
    return sorted(categories)


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance (insert, delete, substitute all cost 1)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]
