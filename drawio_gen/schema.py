"""
Input schema for diagram descriptions.

These models define the JSON DSL accepted by the compiler:
- Nodes with id, label, shape type, optional group, style, position and size
- Edges connecting nodes or groups (using from/to naming convention)
- Groups (containers) that may nest inside other groups
- Layout configuration and theme selection

Field Naming Convention:
- Style overrides use draw.io's camelCase names on the wire (fillColor, ...)
- Edges use `from` and `to`; `source`/`target` are accepted and converted
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class ThemeName(str, Enum):
    """Built-in color themes."""
    PROFESSIONAL = "professional"
    COLORFUL = "colorful"
    MONOCHROME = "monochrome"
    BLUEPRINT = "blueprint"
    PASTEL = "pastel"


class LayoutAlgorithm(str, Enum):
    """Automatic layout strategies."""
    HIERARCHICAL = "hierarchical"
    FORCE = "force"
    TREE = "tree"
    RADIAL = "radial"
    BOX = "box"
    NONE = "none"  # Keep positions exactly as given


class LayoutDirection(str, Enum):
    """Flow direction for layered layouts."""
    TB = "TB"
    BT = "BT"
    LR = "LR"
    RL = "RL"


class Routing(str, Enum):
    """How an edge is drawn between its endpoints."""
    STRAIGHT = "straight"
    ORTHOGONAL = "orthogonal"


class _Spec(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, use_enum_values=True, validate_default=True, extra="forbid"
    )


class StyleOverride(_Spec):
    """Per-element style values that take precedence over the theme."""
    fill_color: Optional[str] = Field(default=None, alias="fillColor")
    stroke_color: Optional[str] = Field(default=None, alias="strokeColor")
    font_color: Optional[str] = Field(default=None, alias="fontColor")
    font_size: Optional[float] = Field(default=None, alias="fontSize")
    font_family: Optional[str] = Field(default=None, alias="fontFamily")
    rounded: Optional[bool] = None
    dashed: Optional[bool] = None
    shadow: Optional[bool] = None
    opacity: Optional[float] = Field(default=None, ge=0, le=100)
    stroke_width: Optional[float] = Field(default=None, alias="strokeWidth")


class Position(_Spec):
    x: float
    y: float


class Size(_Spec):
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class NodeSpec(_Spec):
    """A node in the description."""
    id: str = Field(min_length=1)
    label: str = ""
    type: str = "flowchart.process"
    group: Optional[str] = None
    style: Optional[StyleOverride] = None
    position: Optional[Position] = None
    size: Optional[Size] = None


class EdgeSpec(_Spec):
    """
    An edge connecting two nodes or groups.

    Uses `from` and `to` as canonical field names.
    Accepts `source`/`target` on input for convenience.
    """
    from_: str = Field(alias="from", min_length=1)
    to: str = Field(min_length=1)
    label: Optional[str] = None
    style: Optional[StyleOverride] = None
    routing: Routing = Routing.ORTHOGONAL

    @model_validator(mode="before")
    @classmethod
    def convert_source_target(cls, data: Any) -> Any:
        """Convert 'source'/'target' fields to 'from'/'to'."""
        if isinstance(data, dict):
            data = dict(data)
            if "source" in data and "from" not in data and "from_" not in data:
                data["from"] = data.pop("source")
            if "target" in data and "to" not in data:
                data["to"] = data.pop("target")
        return data


class GroupSpec(_Spec):
    """A container that holds nodes and other groups."""
    id: str = Field(min_length=1)
    label: str = ""
    parent: Optional[str] = None
    style: Optional[StyleOverride] = None


class Spacing(_Spec):
    node: float = Field(default=50, gt=0)
    layer: float = Field(default=80, gt=0)


class LayoutConfig(_Spec):
    algorithm: LayoutAlgorithm = LayoutAlgorithm.HIERARCHICAL
    direction: LayoutDirection = LayoutDirection.TB
    spacing: Spacing = Field(default_factory=Spacing)


class DiagramDescription(_Spec):
    """
    The complete diagram description.
    This is what callers send to the compiler.
    """
    title: str = "Untitled Diagram"
    theme: ThemeName = ThemeName.PROFESSIONAL
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    nodes: list[NodeSpec] = Field(min_length=1)
    edges: list[EdgeSpec] = Field(default_factory=list)
    groups: list[GroupSpec] = Field(default_factory=list)


# --- Validation ---

@dataclass
class DescriptionValidation:
    """Outcome of validating raw input against the schema and structure rules."""
    ok: bool
    diagram: Optional[DiagramDescription] = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"ok": self.ok, "errors": list(self.errors)}


def validate_description(data: Any) -> DescriptionValidation:
    """
    Validate raw input (usually parsed JSON) into a DiagramDescription.

    Checks for:
    - Schema errors (types, required fields, value ranges)
    - Duplicate ids across nodes and groups
    - Edges referencing unknown nodes/groups
    - Nodes referencing unknown groups
    - Groups referencing unknown parents
    - Circular group nesting

    Returns:
        DescriptionValidation with the parsed diagram when ok
    """
    try:
        diagram = DiagramDescription.model_validate(data)
    except ValidationError as e:
        errors = []
        for issue in e.errors():
            path = ".".join(str(part) for part in issue["loc"])
            errors.append(f"{path}: {issue['msg']}" if path else issue["msg"])
        return DescriptionValidation(ok=False, errors=errors)

    errors = check_structure(diagram)
    if errors:
        return DescriptionValidation(ok=False, errors=errors)
    return DescriptionValidation(ok=True, diagram=diagram)


def check_structure(diagram: DiagramDescription) -> list[str]:
    """Cross-reference checks that the schema alone cannot express."""
    errors: list[str] = []
    node_ids = [n.id for n in diagram.nodes]
    group_ids = [g.id for g in diagram.groups]
    all_ids = list(dict.fromkeys(node_ids + group_ids))
    group_id_set = set(group_ids)
    known = set(all_ids)

    seen: set[str] = set()
    for node_id in node_ids:
        if node_id in seen:
            errors.append(f'Duplicate node ID: "{node_id}"')
        seen.add(node_id)
    for group_id in group_ids:
        if group_id in seen:
            errors.append(f'Duplicate ID "{group_id}" (used by both a node and a group, or duplicate group)')
        seen.add(group_id)

    available = ", ".join(all_ids)
    for edge in diagram.edges:
        if edge.from_ not in known:
            errors.append(f'Edge references unknown source "{edge.from_}". Available IDs: {available}')
        if edge.to not in known:
            errors.append(f'Edge references unknown target "{edge.to}". Available IDs: {available}')

    available_groups = ", ".join(group_ids) or "(none)"
    for node in diagram.nodes:
        if node.group is not None and node.group not in group_id_set:
            errors.append(
                f'Node "{node.id}" references unknown group "{node.group}". Available groups: {available_groups}'
            )

    for group in diagram.groups:
        if group.parent is not None and group.parent not in group_id_set:
            errors.append(
                f'Group "{group.id}" references unknown parent "{group.parent}". Available groups: {available_groups}'
            )

    cycle = find_group_cycle(diagram.groups)
    if cycle:
        errors.append(f'Circular group nesting detected involving "{cycle}"')

    return errors


def find_group_cycle(groups: list[GroupSpec]) -> Optional[str]:
    """Return a group id that sits on a parent cycle, or None."""
    parents = {g.id: g.parent for g in groups}
    for group in groups:
        visited: set[str] = set()
        current: Optional[str] = group.id
        while current is not None:
            if current in visited:
                return current
            visited.add(current)
            current = parents.get(current)
    return None


def description_json_schema() -> dict:
    """JSON schema of the input format, for agents and editors."""
    return DiagramDescription.model_json_schema(by_alias=True)
