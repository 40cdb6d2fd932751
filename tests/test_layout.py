"""Tests for the layout engine, algorithms and the model adapter."""

import asyncio
import copy
import math

import pytest

from drawio_gen.graph import Point, Size
from drawio_gen.layout import NestedLayoutEngine, build_layout_graph, compute_layout
from drawio_gen.layout.adapter import fit_groups, layout_options
from drawio_gen.layout.algorithms import (
    LayoutBox,
    assign_levels,
    clear_fixed,
    force_layout,
    pack_layout,
    radial_layout,
)
from drawio_gen.schema import LayoutConfig

ALGORITHMS = ["hierarchical", "force", "tree", "radial", "box"]


class RecordingEngine:
    """Returns a canned result and remembers what it was given."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    async def layout(self, graph):
        self.calls.append(graph)
        return self.result


class FailingEngine:
    async def layout(self, graph):
        raise RuntimeError("engine exploded")


def _overlaps(a: LayoutBox, b: LayoutBox) -> bool:
    return (
        a.x < b.x + b.width and b.x < a.x + a.width
        and a.y < b.y + b.height and b.y < a.y + a.height
    )


def _inside(inner_pos, inner_size, outer_pos, outer_size) -> bool:
    eps = 1e-6
    return (
        inner_pos.x >= outer_pos.x - eps
        and inner_pos.y >= outer_pos.y - eps
        and inner_pos.x + inner_size.width <= outer_pos.x + outer_size.width + eps
        and inner_pos.y + inner_size.height <= outer_pos.y + outer_size.height + eps
    )


# --- Adapter: building the engine graph ---

def test_options_map_vocabulary():
    options = layout_options(LayoutConfig(algorithm="tree", direction="LR"))

    assert options["elk.algorithm"] == "mrtree"
    assert options["elk.direction"] == "RIGHT"
    assert options["elk.spacing.nodeNode"] == "50"
    assert options["elk.layered.spacing.nodeNodeBetweenLayers"] == "80"


def test_options_for_every_algorithm():
    expected = {
        "hierarchical": "layered",
        "force": "force",
        "tree": "mrtree",
        "radial": "radial",
        "box": "rectpacking",
    }
    for algorithm, elk_name in expected.items():
        assert layout_options(LayoutConfig(algorithm=algorithm))["elk.algorithm"] == elk_name


def test_layout_graph_nesting(nested_data, build):
    model = build(nested_data)
    graph = build_layout_graph(model, LayoutConfig())

    assert graph["id"] == "root"
    top_ids = [c["id"] for c in graph["children"]]
    outer = model.get_group("outer")
    assert top_ids == [str(outer.cell_id), str(model.get_node("d").cell_id)]

    outer_element = graph["children"][0]
    assert outer_element["layoutOptions"]["elk.padding"] == "[top=40,left=20,bottom=20,right=20]"
    inner_element = outer_element["children"][0]
    assert inner_element["id"] == str(model.get_group("inner").cell_id)
    assert [c["id"] for c in inner_element["children"]] == [
        str(model.get_node("a").cell_id),
        str(model.get_node("b").cell_id),
    ]

    # Every edge sits at the root, whatever containers its ends live in
    assert len(graph["edges"]) == 3
    first = graph["edges"][0]
    assert first["sources"] == [str(model.get_node("a").cell_id)]
    assert first["targets"] == [str(model.get_node("b").cell_id)]


def test_pinned_node_marked_no_layout(build):
    model = build({"nodes": [{"id": "a", "position": {"x": 5, "y": 7}}, {"id": "b"}]})
    graph = build_layout_graph(model, LayoutConfig())

    pinned, free = graph["children"]
    assert pinned["x"] == 5 and pinned["y"] == 7
    assert pinned["layoutOptions"]["org.eclipse.elk.noLayout"] == "true"
    assert "layoutOptions" not in free


def test_empty_group_has_default_box(build):
    model = build({"nodes": [{"id": "a"}], "groups": [{"id": "empty"}]})
    graph = build_layout_graph(model, LayoutConfig())

    empty = graph["children"][0]
    assert empty["children"] == []
    assert (empty["width"], empty["height"]) == (200, 200)


# --- Adapter: running the engine ---

def test_no_layout_returns_model_unchanged(build, simple_data):
    simple_data["layout"] = {"algorithm": "none"}
    model = build(simple_data)
    engine = RecordingEngine({})

    result = asyncio.run(compute_layout(model, LayoutConfig(algorithm="none"), engine))

    assert result is model
    assert engine.calls == []


def test_relative_positions_accumulate(build):
    """Engine output is parent-relative; the model gets absolute positions."""
    model = build({
        "nodes": [{"id": "n", "group": "g"}],
        "groups": [{"id": "g"}],
    })
    engine = RecordingEngine({
        "id": "root",
        "x": 0,
        "y": 0,
        "children": [{
            "id": "2",
            "x": 100,
            "y": 50,
            "width": 300,
            "height": 200,
            "children": [{"id": "3", "x": 20, "y": 40, "width": 120, "height": 60}],
        }],
    })

    result = asyncio.run(compute_layout(model, LayoutConfig(), engine))

    assert len(engine.calls) == 1
    group = result.get_group("g")
    node = result.get_node("n")
    assert group.position == Point(100, 50)
    assert group.size == Size(300, 200)
    assert node.position == Point(120, 90)
    # The input model is left alone
    assert model.get_node("n").position is None


def test_engine_failure_propagates(build, simple_data):
    model = build(simple_data)
    with pytest.raises(RuntimeError, match="engine exploded"):
        asyncio.run(compute_layout(model, LayoutConfig(), FailingEngine()))


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_manual_position_preserved(algorithm, build):
    model = build({
        "nodes": [
            {"id": "a", "position": {"x": 500, "y": 300}},
            {"id": "b"},
            {"id": "c"},
        ],
        "edges": [{"from": "a", "to": "b"}, {"from": "b", "to": "c"}],
    })

    result = asyncio.run(compute_layout(model, LayoutConfig(algorithm=algorithm)))

    assert result.get_node("a").position == Point(500, 300)
    assert result.get_node("b").position is not None
    assert result.get_node("c").position is not None


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_nodes_inside_ancestor_groups(algorithm, nested_data, build):
    model = build(nested_data)
    result = asyncio.run(compute_layout(model, LayoutConfig(algorithm=algorithm)))

    groups = {g.id: g for g in result.groups}
    for group in groups.values():
        assert group.position is not None and group.size is not None

    for node in result.nodes:
        assert node.position is not None
        group_id = node.group
        while group_id is not None:
            group = groups[group_id]
            assert _inside(node.position, node.size, group.position, group.size), (node.id, group_id)
            group_id = group.parent

    inner, outer = groups["inner"], groups["outer"]
    assert _inside(inner.position, inner.size, outer.position, outer.size)


def test_empty_group_keeps_default_size(build):
    model = build({"nodes": [{"id": "a"}], "groups": [{"id": "empty"}]})
    result = asyncio.run(compute_layout(model, LayoutConfig()))

    assert result.get_group("empty").size == Size(200, 200)


# --- Engine ---

def _chain_graph(direction):
    return {
        "id": "root",
        "layoutOptions": {"elk.algorithm": "layered", "elk.direction": direction},
        "children": [
            {"id": "a", "width": 120, "height": 60},
            {"id": "b", "width": 120, "height": 60},
            {"id": "c", "width": 120, "height": 60},
        ],
        "edges": [
            {"id": "e1", "sources": ["a"], "targets": ["b"]},
            {"id": "e2", "sources": ["b"], "targets": ["c"]},
        ],
    }


def _positions(result):
    return {c["id"]: (c["x"], c["y"]) for c in result["children"]}


def test_engine_layered_directions():
    engine = NestedLayoutEngine()

    down = _positions(engine.layout_sync(_chain_graph("DOWN")))
    assert down["a"][1] < down["b"][1] < down["c"][1]

    up = _positions(engine.layout_sync(_chain_graph("UP")))
    assert up["a"][1] > up["b"][1] > up["c"][1]

    right = _positions(engine.layout_sync(_chain_graph("RIGHT")))
    assert right["a"][0] < right["b"][0] < right["c"][0]

    left = _positions(engine.layout_sync(_chain_graph("LEFT")))
    assert left["a"][0] > left["b"][0] > left["c"][0]


def test_engine_applies_padding_and_spacing():
    result = NestedLayoutEngine().layout_sync(_chain_graph("DOWN"))
    positions = _positions(result)

    assert positions["a"] == (12, 12)
    assert positions["b"][1] == 12 + 60 + 80
    assert result["width"] == 12 + 120 + 12
    assert result["height"] == 12 + 3 * 60 + 2 * 80 + 12


def test_engine_does_not_modify_input():
    graph = _chain_graph("DOWN")
    before = copy.deepcopy(graph)

    NestedLayoutEngine().layout_sync(graph)
    assert graph == before


def test_engine_is_awaitable():
    result = asyncio.run(NestedLayoutEngine().layout(_chain_graph("DOWN")))
    assert "x" in result["children"][0]


def test_engine_keeps_pinned_child():
    graph = {
        "id": "root",
        "children": [
            {"id": "p", "width": 10, "height": 10, "x": 300, "y": 400,
             "layoutOptions": {"org.eclipse.elk.noLayout": "true"}},
            {"id": "q", "width": 10, "height": 10},
        ],
    }
    result = NestedLayoutEngine().layout_sync(graph)

    assert _positions(result)["p"] == (300, 400)
    assert result["width"] >= 310
    assert result["height"] >= 410


def test_engine_lifts_edges_between_containers():
    """An edge between members of two groups orders the groups themselves."""
    graph = {
        "id": "root",
        "children": [
            {"id": "g1", "children": [{"id": "x", "width": 120, "height": 60}],
             "layoutOptions": {"elk.padding": "[top=40,left=20,bottom=20,right=20]"}},
            {"id": "g2", "children": [{"id": "y", "width": 120, "height": 60}],
             "layoutOptions": {"elk.padding": "[top=40,left=20,bottom=20,right=20]"}},
        ],
        "edges": [{"id": "e", "sources": ["x"], "targets": ["y"]}],
    }
    result = NestedLayoutEngine().layout_sync(graph)
    g1, g2 = result["children"]

    assert (g1["width"], g1["height"]) == (160, 120)
    assert g2["y"] > g1["y"] + g1["height"]
    assert g1["children"][0]["x"] == 20
    assert g1["children"][0]["y"] == 40


# --- Algorithms ---

def _boxes(count, width=120, height=60):
    return [LayoutBox(id=str(i), width=width, height=height) for i in range(count)]


def test_levels_break_cycles():
    boxes = _boxes(3)
    levels = assign_levels(boxes, [("0", "1"), ("1", "2"), ("2", "0")])
    assert sorted(levels.values()) == [0, 1, 2]


def test_pack_layout_has_no_overlaps():
    boxes = [LayoutBox(id=str(i), width=40 + 20 * i, height=30 + 10 * (i % 3)) for i in range(8)]
    pack_layout(boxes, node_spacing=10)

    for i, a in enumerate(boxes):
        for b in boxes[i + 1:]:
            assert not _overlaps(a, b)


def test_force_layout_has_no_overlaps():
    boxes = _boxes(5)
    links = [("0", "1"), ("1", "2"), ("2", "3"), ("3", "4"), ("4", "0")]
    force_layout(boxes, links)

    for i, a in enumerate(boxes):
        for b in boxes[i + 1:]:
            assert not _overlaps(a, b)


def test_radial_layout_rings():
    boxes = _boxes(4)
    radial_layout(boxes, [("0", "1"), ("0", "2"), ("0", "3")])

    assert boxes[0].center == (0, 0)
    distances = [math.hypot(*b.center) for b in boxes[1:]]
    assert max(distances) - min(distances) < 1e-6
    assert min(distances) > 0


# --- Pinned nodes ---

def _node_box(node) -> LayoutBox:
    return LayoutBox(node.id, node.size.width, node.size.height, node.position.x, node.position.y)


@pytest.mark.parametrize("direction", ["TB", "LR"])
def test_computed_nodes_clear_pinned_node(direction, build):
    """A node pinned where the first layer would go is not covered."""
    model = build({
        "nodes": [{"id": "pin", "position": {"x": 12, "y": 12}}, {"id": "a"}, {"id": "b"}],
        "edges": [{"from": "a", "to": "b"}],
    })
    result = asyncio.run(compute_layout(model, LayoutConfig(direction=direction)))

    pin = result.get_node("pin")
    assert pin.position == Point(12, 12)
    for node_id in ("a", "b"):
        assert not _overlaps(_node_box(pin), _node_box(result.get_node(node_id))), node_id


def test_clear_fixed_keeps_arrangement():
    boxes = [
        LayoutBox("pin", 120, 60, 12, 12, fixed=True),
        LayoutBox("a", 120, 60, 12, 12),
        LayoutBox("b", 120, 60, 12, 152),
    ]
    clear_fixed(boxes, spacing=50)

    pin, a, b = boxes
    assert (pin.x, pin.y) == (12, 12)
    assert (a.x, a.y) == (12, 122)
    assert b.y - a.y == 140


def test_clear_fixed_leaves_separate_boxes_alone():
    boxes = [LayoutBox("pin", 10, 10, 300, 400, fixed=True), LayoutBox("a", 120, 60, 12, 12)]
    clear_fixed(boxes)
    assert (boxes[1].x, boxes[1].y) == (12, 12)


@pytest.mark.parametrize("algorithm", ALGORITHMS)
def test_group_covers_pinned_member(algorithm, build):
    model = build({
        "nodes": [
            {"id": "n", "group": "g", "position": {"x": 500, "y": 400}},
            {"id": "m", "group": "g"},
            {"id": "outside"},
        ],
        "groups": [{"id": "g"}],
        "edges": [{"from": "m", "to": "outside"}],
    })
    result = asyncio.run(compute_layout(model, LayoutConfig(algorithm=algorithm)))

    group = result.get_group("g")
    for node_id in ("n", "m"):
        node = result.get_node(node_id)
        assert _inside(node.position, node.size, group.position, group.size), node_id
    assert result.get_node("n").position == Point(500, 400)


def test_fit_groups_grows_parents_too(build):
    model = build({
        "nodes": [{"id": "n", "group": "inner", "position": {"x": 900, "y": 900}}],
        "groups": [{"id": "outer"}, {"id": "inner", "parent": "outer"}],
    })
    outer, inner = model.groups
    outer.position, outer.size = Point(0, 0), Size(300, 300)
    inner.position, inner.size = Point(20, 40), Size(200, 200)

    outer_fit, inner_fit = fit_groups(model.nodes, model.groups)

    assert inner_fit.position == Point(20, 40)
    assert inner_fit.size == Size(900 + 120 + 20 - 20, 900 + 60 + 20 - 40)
    assert outer_fit.position == Point(0, 0)
    assert outer_fit.size == Size(1040 + 20, 980 + 20)
