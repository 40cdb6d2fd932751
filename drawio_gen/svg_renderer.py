"""
Image renderer - draws a positioned GraphModel as SVG.

The SVG is a preview, not a full draw.io renderer: nodes become one of a
few primitives (rectangle, diamond, ellipse, cylinder), edges become
straight lines clipped to the endpoint boxes, and labels are word-wrapped
with an average-character-width estimate. ``render_drawio_svg`` adds the
compressed draw.io XML as the root ``content`` attribute so draw.io can
open the image for editing.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .graph import DEFAULT_GROUP_SIZE, GraphEdge, GraphGroup, GraphModel, GraphNode
from .markup import compress_xml, escape_attr, escape_text, format_number, unescape_xml
from .styles import StyleMap

CANVAS_PADDING = 20
DEFAULT_BOUNDS = (0.0, 0.0, 200.0, 200.0)
DEFAULT_FONT = "Helvetica"
CYLINDER_CAP = 10  # ry of the cylinder's top/bottom ellipses

# Average glyph width as a fraction of the font size
CHAR_WIDTH = 0.58
BOLD_CHAR_WIDTH = 0.65
MIN_CHARS_PER_LINE = 10
LINE_HEIGHT = 1.3
BASELINE = 0.85  # first baseline sits this far below the top of the line box

FONT_BOLD = 1
FONT_ITALIC = 2

WHITE = ("#ffffff", "#fff", "white", "none", "")


@dataclass
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def _n(value: float) -> str:
    return format_number(value)


def compute_bounds(model: GraphModel) -> Bounds:
    """Union of all node and group boxes (a default box for an empty model)."""
    boxes = []
    for node in model.nodes:
        x = node.position.x if node.position else 0.0
        y = node.position.y if node.position else 0.0
        boxes.append((x, y, x + node.size.width, y + node.size.height))
    for group in model.groups:
        x, y, width, height = _group_box(group)
        boxes.append((x, y, x + width, y + height))

    if not boxes:
        return Bounds(*DEFAULT_BOUNDS)
    return Bounds(
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )


def _group_box(group: GraphGroup) -> tuple[float, float, float, float]:
    x = group.position.x if group.position else 0.0
    y = group.position.y if group.position else 0.0
    width, height = (group.size.width, group.size.height) if group.size else DEFAULT_GROUP_SIZE
    return x, y, width, height


def connection_point(
    x: float, y: float, width: float, height: float, to_x: float, to_y: float
) -> tuple[float, float]:
    """
    Where the line from the box center toward (to_x, to_y) leaves the box.

    The direction vector is scaled by half-width/|dx| and half-height/|dy|;
    the smaller factor hits the border first.
    """
    cx = x + width / 2
    cy = y + height / 2
    dx = to_x - cx
    dy = to_y - cy
    if dx == 0 and dy == 0:
        return cx, cy

    scale_x = (width / 2) / abs(dx) if dx != 0 else math.inf
    scale_y = (height / 2) / abs(dy) if dy != 0 else math.inf
    scale = min(scale_x, scale_y)
    return cx + dx * scale, cy + dy * scale


def wrap_words(text: str, max_chars: int) -> list[str]:
    """Greedy word wrap; a single long word stays on its own line."""
    if not text.strip():
        return [""]
    lines: list[str] = []
    current = ""
    for word in text.split():
        if not current:
            current = word
        elif len(current) + 1 + len(word) <= max_chars:
            current += " " + word
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines or [""]


def render_label(label: str, x: float, y: float, width: float, height: float, style: StyleMap) -> str:
    """
    Lay out a label inside a box as a <text> with one <tspan> per line.

    Honors align, verticalAlign, spacingLeft/Right/Top/Bottom, fontStyle
    (bold=1, italic=2), fontSize, fontColor and fontFamily from the style.
    Returns "" for blank labels.
    """
    text = unescape_xml(label)
    if not text.strip():
        return ""

    font_size = style.number("fontSize", 12)
    font_color = style.text("fontColor", "#333")
    font_family = style.text("fontFamily", DEFAULT_FONT)
    align = style.text("align", "center")
    vertical_align = style.text("verticalAlign", "middle")
    spacing = style.number("spacing", 5)
    spacing_left = style.number("spacingLeft", spacing)
    spacing_right = style.number("spacingRight", spacing)
    spacing_top = style.number("spacingTop", spacing)
    spacing_bottom = style.number("spacingBottom", spacing)
    font_style = int(style.number("fontStyle", 0))
    bold = bool(font_style & FONT_BOLD)
    italic = bool(font_style & FONT_ITALIC)

    available = width - spacing_left - spacing_right
    char_width = font_size * (BOLD_CHAR_WIDTH if bold else CHAR_WIDTH)
    chars_per_line = max(MIN_CHARS_PER_LINE, int(available // char_width))

    lines: list[str] = []
    for segment in text.split("\n"):
        lines.extend(wrap_words(segment, chars_per_line))

    line_height = font_size * LINE_HEIGHT
    block_height = len(lines) * line_height

    if align == "left":
        anchor, text_x = "start", x + spacing_left
    elif align == "right":
        anchor, text_x = "end", x + width - spacing_right
    else:
        anchor, text_x = "middle", x + width / 2

    if vertical_align == "top":
        start_y = y + spacing_top + font_size * BASELINE
    elif vertical_align == "bottom":
        start_y = y + height - spacing_bottom - block_height + font_size * BASELINE
    else:
        start_y = y + (height - block_height) / 2 + font_size * BASELINE

    attrs = [
        f'font-family="{escape_attr(font_family)}"',
        f'font-size="{_n(font_size)}"',
    ]
    if bold:
        attrs.append('font-weight="bold"')
    if italic:
        attrs.append('font-style="italic"')
    attrs.append(f'fill="{escape_attr(font_color)}"')

    tspans = "".join(
        f'<tspan x="{_n(text_x)}" dy="{_n(0 if i == 0 else line_height)}">{escape_text(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    return f'    <text x="{_n(text_x)}" y="{_n(start_y)}" text-anchor="{anchor}" {" ".join(attrs)}>{tspans}</text>'


def shape_kind(style: StyleMap) -> str:
    """Pick the drawing primitive: diamond, ellipse, cylinder or rect."""
    shape = style.text("shape", "") or ""
    if "rhombus" in style or shape == "rhombus":
        return "diamond"
    if "ellipse" in style or shape in ("ellipse", "cloud") or style.get("perimeter") == "ellipsePerimeter":
        return "ellipse"
    if shape.startswith("cylinder"):
        return "cylinder"
    return "rect"


def render_group(group: GraphGroup, offset_x: float, offset_y: float) -> list[str]:
    x, y, width, height = _group_box(group)
    x += offset_x
    y += offset_y
    style = group.style
    fill = escape_attr(style.text("fillColor", "#f5f5f5"))
    stroke = escape_attr(style.text("strokeColor", "#999999"))
    dash = ' stroke-dasharray="8,4"' if style.flag("dashed") else ""
    font_size = style.number("fontSize", 13)
    font_color = escape_attr(style.text("fontColor", "#333"))
    font_family = escape_attr(style.text("fontFamily", DEFAULT_FONT))
    return [
        "  <g>",
        f'    <rect x="{_n(x)}" y="{_n(y)}" width="{_n(width)}" height="{_n(height)}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="1" rx="6"{dash}/>',
        f'    <text x="{_n(x + 10)}" y="{_n(y + 18)}" font-family="{font_family}" font-size="{_n(font_size)}" '
        f'font-weight="bold" fill="{font_color}">{escape_text(unescape_xml(group.label))}</text>',
        "  </g>",
    ]


def render_node(node: GraphNode, offset_x: float, offset_y: float) -> list[str]:
    x = (node.position.x if node.position else 0.0) + offset_x
    y = (node.position.y if node.position else 0.0) + offset_y
    w, h = node.size.width, node.size.height
    style = node.style
    paint = (
        f'fill="{escape_attr(style.text("fillColor", "#dae8fc"))}" '
        f'stroke="{escape_attr(style.text("strokeColor", "#6c8ebf"))}" '
        f'stroke-width="{_n(style.number("strokeWidth", 1))}"'
    )
    if style.flag("dashed"):
        paint += ' stroke-dasharray="6,3"'
    if "opacity" in style:
        paint += f' opacity="{_n(style.number("opacity", 100) / 100)}"'

    kind = shape_kind(style)
    cx, cy = x + w / 2, y + h / 2
    if kind == "diamond":
        primitives = [
            f'    <polygon points="{_n(cx)},{_n(y)} {_n(x + w)},{_n(cy)} {_n(cx)},{_n(y + h)} {_n(x)},{_n(cy)}" {paint}/>'
        ]
    elif kind == "ellipse":
        primitives = [f'    <ellipse cx="{_n(cx)}" cy="{_n(cy)}" rx="{_n(w / 2)}" ry="{_n(h / 2)}" {paint}/>']
    elif kind == "cylinder":
        cap = CYLINDER_CAP
        primitives = [
            f'    <path d="M{_n(x)},{_n(y + cap)} A{_n(w / 2)},{cap} 0 0,1 {_n(x + w)},{_n(y + cap)} '
            f'V{_n(y + h - cap)} A{_n(w / 2)},{cap} 0 0,1 {_n(x)},{_n(y + h - cap)} Z" {paint}/>',
            f'    <ellipse cx="{_n(cx)}" cy="{_n(y + cap)}" rx="{_n(w / 2)}" ry="{cap}" {paint}/>',
        ]
    else:
        rx = 6 if style.flag("rounded") else 0
        primitives = [
            f'    <rect x="{_n(x)}" y="{_n(y)}" width="{_n(w)}" height="{_n(h)}" {paint} rx="{rx}"/>'
        ]

    label = render_label(node.label, x, y, w, h, style)
    return ["  <g>", *primitives, *([label] if label else []), "  </g>"]


def _entity_box(model: GraphModel, entity_id: str) -> Optional[tuple[float, float, float, float]]:
    entity = model.get_entity(entity_id)
    if entity is None or entity.position is None:
        return None
    if isinstance(entity, GraphGroup):
        return _group_box(entity)
    return entity.position.x, entity.position.y, entity.size.width, entity.size.height


def render_edge(model: GraphModel, edge: GraphEdge, offset_x: float, offset_y: float) -> list[str]:
    """A straight connector between the two endpoint boxes; [] if either is unplaced."""
    source = _entity_box(model, edge.source_id)
    target = _entity_box(model, edge.target_id)
    if source is None or target is None:
        return []

    sx, sy, sw, sh = source[0] + offset_x, source[1] + offset_y, source[2], source[3]
    tx, ty, tw, th = target[0] + offset_x, target[1] + offset_y, target[2], target[3]
    x1, y1 = connection_point(sx, sy, sw, sh, tx + tw / 2, ty + th / 2)
    x2, y2 = connection_point(tx, ty, tw, th, sx + sw / 2, sy + sh / 2)

    style = edge.style
    stroke = escape_attr(style.text("strokeColor", "#666"))
    stroke_width = _n(style.number("strokeWidth", 1))
    dash = ' stroke-dasharray="6,3"' if style.flag("dashed") else ""
    lines = [
        "  <g>",
        f'    <line x1="{_n(x1)}" y1="{_n(y1)}" x2="{_n(x2)}" y2="{_n(y2)}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"{dash} marker-end="url(#arrowhead)"/>',
    ]
    if edge.label:
        font_color = escape_attr(style.text("fontColor", "#333"))
        font_size = _n(style.number("fontSize", 11))
        lines.append(
            f'    <text x="{_n((x1 + x2) / 2)}" y="{_n((y1 + y2) / 2 - 5)}" text-anchor="middle" '
            f'font-family="{DEFAULT_FONT}" font-size="{font_size}" fill="{font_color}">'
            f"{escape_text(unescape_xml(edge.label))}</text>"
        )
    lines.append("  </g>")
    return lines


def render_svg(model: GraphModel) -> str:
    """
    Render the model as a standalone SVG document (no embedded content).

    Groups are drawn outermost first, then nodes, then edges.
    """
    bounds = compute_bounds(model)
    width = math.ceil(bounds.width + CANVAS_PADDING * 2)
    height = math.ceil(bounds.height + CANVAS_PADDING * 2)
    offset_x = CANVAS_PADDING - bounds.min_x
    offset_y = CANVAS_PADDING - bounds.min_y

    elements: list[str] = []
    if model.background.lower() not in WHITE:
        elements.append(f'  <rect x="0" y="0" width="{width}" height="{height}" fill="{escape_attr(model.background)}"/>')

    for group in sorted(model.groups, key=model.group_depth):
        elements.extend(render_group(group, offset_x, offset_y))
    for node in model.nodes:
        elements.extend(render_node(node, offset_x, offset_y))
    for edge in model.edges:
        elements.extend(render_edge(model, edge, offset_x, offset_y))

    return "\n".join([
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">',
        f'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
        f'version="1.1" width="{width}px" height="{height}px" viewBox="0 0 {width} {height}">',
        "  <defs>",
        '    <marker id="arrowhead" markerWidth="10" markerHeight="7" refX="10" refY="3.5" orient="auto">',
        '      <polygon points="0 0, 10 3.5, 0 7" fill="#666"/>',
        "    </marker>",
        "  </defs>",
        *elements,
        "</svg>",
    ])


def embed_content(svg: str, xml: str) -> str:
    """Splice the compressed draw.io XML into the root <svg> as ``content``."""
    return svg.replace("<svg ", f'<svg content="{escape_attr(compress_xml(xml))}" ', 1)


def render_drawio_svg(model: GraphModel, xml: str) -> str:
    """SVG preview of ``model`` carrying ``xml`` as its editable source."""
    return embed_content(render_svg(model), xml)
