"""Tests for description schema and structural validation."""

from drawio_gen.schema import description_json_schema, validate_description


def test_defaults_are_filled_in():
    """A bare node list gets every documented default."""
    result = validate_description({"nodes": [{"id": "a"}]})

    assert result.ok
    diagram = result.diagram
    assert diagram.title == "Untitled Diagram"
    assert diagram.theme == "professional"
    assert diagram.layout.algorithm == "hierarchical"
    assert diagram.layout.direction == "TB"
    assert diagram.layout.spacing.node == 50
    assert diagram.layout.spacing.layer == 80
    assert diagram.nodes[0].type == "flowchart.process"
    assert diagram.nodes[0].label == ""
    assert diagram.edges == []
    assert diagram.groups == []


def test_edge_defaults_to_orthogonal_routing(simple_data):
    result = validate_description(simple_data)
    assert result.diagram.edges[0].routing == "orthogonal"


def test_source_target_accepted_as_from_to():
    """Edges may use source/target instead of from/to."""
    result = validate_description({
        "nodes": [{"id": "a"}, {"id": "b"}],
        "edges": [{"source": "a", "target": "b"}],
    })

    assert result.ok, result.errors
    assert result.diagram.edges[0].from_ == "a"
    assert result.diagram.edges[0].to == "b"


def test_style_override_uses_camel_case_keys():
    result = validate_description({
        "nodes": [{"id": "a", "style": {"fillColor": "#ff0000", "fontSize": 14}}],
    })

    assert result.ok, result.errors
    style = result.diagram.nodes[0].style
    assert style.fill_color == "#ff0000"
    assert style.font_size == 14


def test_empty_node_list_rejected():
    result = validate_description({"nodes": []})

    assert not result.ok
    assert result.diagram is None
    assert any(e.startswith("nodes") for e in result.errors)


def test_missing_nodes_rejected():
    result = validate_description({"title": "No nodes"})

    assert not result.ok
    assert any(e.startswith("nodes:") for e in result.errors)


def test_unknown_theme_rejected():
    result = validate_description({"theme": "neon", "nodes": [{"id": "a"}]})

    assert not result.ok
    assert any(e.startswith("theme") for e in result.errors)


def test_opacity_out_of_range_rejected():
    result = validate_description({"nodes": [{"id": "a", "style": {"opacity": 150}}]})

    assert not result.ok
    assert any("opacity" in e for e in result.errors)


def test_unknown_field_rejected():
    """Typos in field names are reported instead of silently ignored."""
    result = validate_description({"nodes": [{"id": "a", "colour": "red"}]})

    assert not result.ok
    assert any("colour" in e for e in result.errors)


def test_non_object_input_rejected():
    result = validate_description(["not", "an", "object"])

    assert not result.ok
    assert result.errors


def test_duplicate_node_ids():
    result = validate_description({"nodes": [{"id": "a"}, {"id": "a"}]})

    assert not result.ok
    assert 'Duplicate node ID: "a"' in result.errors


def test_node_and_group_share_id():
    result = validate_description({
        "nodes": [{"id": "x"}],
        "groups": [{"id": "x"}],
    })

    assert not result.ok
    assert any('Duplicate ID "x"' in e for e in result.errors)


def test_edge_to_unknown_id_lists_available_ids():
    result = validate_description({
        "nodes": [{"id": "a"}, {"id": "b"}],
        "edges": [{"from": "a", "to": "zzz"}],
    })

    assert not result.ok
    assert len(result.errors) == 1
    assert 'unknown target "zzz"' in result.errors[0]
    assert "Available IDs: a, b" in result.errors[0]


def test_edge_may_reference_group():
    result = validate_description({
        "nodes": [{"id": "a"}],
        "groups": [{"id": "g"}],
        "edges": [{"from": "a", "to": "g"}],
    })

    assert result.ok, result.errors


def test_node_in_unknown_group():
    result = validate_description({"nodes": [{"id": "a", "group": "g9"}]})

    assert not result.ok
    assert any('references unknown group "g9"' in e for e in result.errors)


def test_group_with_unknown_parent():
    result = validate_description({
        "nodes": [{"id": "a"}],
        "groups": [{"id": "g1", "parent": "nope"}],
    })

    assert not result.ok
    assert any('references unknown parent "nope"' in e for e in result.errors)


def test_circular_group_nesting():
    result = validate_description({
        "nodes": [{"id": "a"}],
        "groups": [
            {"id": "g1", "parent": "g2"},
            {"id": "g2", "parent": "g1"},
        ],
    })

    assert not result.ok
    assert any("Circular group nesting" in e for e in result.errors)


def test_nested_groups_valid(nested_data):
    result = validate_description(nested_data)
    assert result.ok, result.errors


def test_json_schema_uses_wire_names():
    schema = description_json_schema()

    assert "nodes" in schema["properties"]
    edge_props = schema["$defs"]["EdgeSpec"]["properties"]
    assert "from" in edge_props
    assert "from_" not in edge_props
    assert "fillColor" in schema["$defs"]["StyleOverride"]["properties"]
