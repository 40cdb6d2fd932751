"""Tests for the SVG image renderer and dual-format embedding."""

import asyncio
import re

import pytest

from drawio_gen.encoder import generate_xml
from drawio_gen.export import decode_drawio_svg
from drawio_gen.graph import GraphModel, GraphNode, Point
from drawio_gen.layout import compute_layout
from drawio_gen.schema import LayoutConfig
from drawio_gen.styles import StyleMap
from drawio_gen.svg_renderer import (
    connection_point,
    render_drawio_svg,
    render_label,
    render_svg,
    shape_kind,
    wrap_words,
)


def _node(node_id, x, y, style="rounded=1;whiteSpace=wrap;html=1;", label=""):
    return GraphNode(
        id=node_id,
        cell_id=2,
        label=label,
        style=StyleMap.parse(style),
        position=Point(x, y),
    )


@pytest.mark.parametrize("target,expected", [
    ((200, 25), (100, 25)),
    ((50, 200), (50, 50)),
    ((150, 125), (75, 50)),
    ((-100, 25), (0, 25)),
])
def test_connection_point(target, expected):
    assert connection_point(0, 0, 100, 50, *target) == pytest.approx(expected)


def test_connection_point_same_center():
    assert connection_point(0, 0, 100, 50, 50, 25) == (50, 25)


def test_wrap_words():
    assert wrap_words("the quick brown fox jumps", 10) == ["the quick", "brown fox", "jumps"]
    assert wrap_words("incomprehensibilities", 5) == ["incomprehensibilities"]
    assert wrap_words("   ", 10) == [""]


class TestLabels:
    """Tests for label layout inside a box."""

    def test_vertically_centered(self) -> None:
        text = render_label("Hi", 0, 0, 120, 60, StyleMap.parse("fontSize=12;"))

        assert 'y="32.4"' in text
        assert 'x="60"' in text
        assert 'text-anchor="middle"' in text

    def test_bold_and_italic(self) -> None:
        text = render_label("Hi", 0, 0, 120, 60, StyleMap.parse("fontStyle=3;"))

        assert 'font-weight="bold"' in text
        assert 'font-style="italic"' in text

    def test_left_aligned(self) -> None:
        text = render_label("Hi", 10, 0, 120, 60, StyleMap.parse("align=left;"))

        assert 'text-anchor="start"' in text
        assert 'x="15"' in text

    def test_wraps_into_tspans(self) -> None:
        text = render_label("one two three four five six seven", 0, 0, 80, 60, StyleMap())
        assert text.count("<tspan") > 1

    def test_blank_label(self) -> None:
        assert render_label("  ", 0, 0, 120, 60, StyleMap()) == ""

    def test_label_escaped_once(self) -> None:
        text = render_label("A &amp; B", 0, 0, 120, 60, StyleMap())

        assert "A &amp; B" in text
        assert "&amp;amp;" not in text


@pytest.mark.parametrize("style,kind", [
    ("rhombus;whiteSpace=wrap;", "diamond"),
    ("ellipse;whiteSpace=wrap;", "ellipse"),
    ("shape=cloud;", "ellipse"),
    ("perimeter=ellipsePerimeter;", "ellipse"),
    ("shape=cylinder3;", "cylinder"),
    ("rounded=1;", "rect"),
])
def test_shape_kind(style, kind):
    assert shape_kind(StyleMap.parse(style)) == kind


def test_canvas_size_and_viewbox():
    model = GraphModel(title="t", nodes=[_node("a", 0, 0), _node("b", 200, 100)])
    svg = render_svg(model)

    assert 'width="360px" height="200px" viewBox="0 0 360 200"' in svg
    assert '<rect x="20" y="20" width="120" height="60"' in svg


def test_negative_coordinates_are_shifted():
    model = GraphModel(title="t", nodes=[_node("a", -50, -30)])
    svg = render_svg(model)

    assert '<rect x="20" y="20"' in svg


def test_empty_model_uses_default_bounds():
    svg = render_svg(GraphModel(title="empty"))
    assert 'viewBox="0 0 240 240"' in svg


def test_unplaced_edges_are_skipped(build, simple_data):
    simple_data["layout"] = {"algorithm": "none"}
    svg = render_svg(build(simple_data))

    assert "<line" not in svg


def test_placed_edge_has_arrow_and_label(build):
    model = build({
        "nodes": [{"id": "a", "position": {"x": 0, "y": 0}}, {"id": "b", "position": {"x": 300, "y": 0}}],
        "edges": [{"from": "a", "to": "b", "label": "go"}],
    })
    svg = render_svg(model)

    assert '<line x1="140" y1="50" x2="320" y2="50"' in svg
    assert 'marker-end="url(#arrowhead)"' in svg
    assert '<marker id="arrowhead"' in svg
    assert ">go</text>" in svg


def test_primitives_follow_shape():
    model = GraphModel(title="t", nodes=[
        _node("d", 0, 0, "rhombus;whiteSpace=wrap;html=1;"),
        _node("c", 200, 0, "shape=cylinder3;whiteSpace=wrap;html=1;"),
        _node("e", 400, 0, "ellipse;html=1;"),
    ])
    svg = render_svg(model)

    assert "<polygon points=\"80,20 140,50 80,80 20,50\"" in svg
    assert "<path d=\"M220,30" in svg
    assert '<ellipse cx="480" cy="50" rx="60" ry="30"' in svg


def test_dashed_group_and_nesting(nested_data, build):
    model = asyncio.run(compute_layout(build(nested_data), LayoutConfig()))
    svg = render_svg(model)

    assert svg.count('stroke-dasharray="8,4"') == 2
    assert svg.index(">Outer</text>") < svg.index(">Inner</text>")


def test_dark_theme_background(build):
    model = build({"theme": "blueprint", "nodes": [{"id": "a", "position": {"x": 0, "y": 0}}]})
    svg = render_svg(model)

    assert re.search(r'<rect x="0" y="0" width="160" height="100" fill="#1a237e"/>', svg)


def test_white_background_has_no_rect(build, simple_data):
    svg = render_svg(build(simple_data))
    assert '<rect x="0" y="0"' not in svg


def test_embedded_content_round_trip(nested_data, build):
    model = asyncio.run(compute_layout(build(nested_data), LayoutConfig()))
    xml = generate_xml(model)
    svg = render_drawio_svg(model, xml)

    assert svg.count("<svg ") == 1
    assert re.search(r'<svg content="[A-Za-z0-9+/=]+" xmlns=', svg)
    assert decode_drawio_svg(svg) == xml


def test_node_label_escaped_in_svg(build):
    model = build({"nodes": [{"id": "a", "label": "R&D <lab>", "position": {"x": 0, "y": 0}}]})
    svg = render_svg(model)

    assert "R&amp;D &lt;lab&gt;" in svg
    assert "&amp;amp;" not in svg
