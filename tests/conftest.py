"""Pytest fixtures shared by the drawio-gen tests."""

import copy

import pytest

from drawio_gen.builder import build_graph
from drawio_gen.schema import validate_description

SIMPLE = {
    "title": "Simple",
    "nodes": [
        {"id": "a", "label": "Start"},
        {"id": "b", "label": "End"},
    ],
    "edges": [{"from": "a", "to": "b"}],
}

NESTED = {
    "title": "Nested",
    "nodes": [
        {"id": "a", "label": "A", "group": "inner"},
        {"id": "b", "label": "B", "group": "inner"},
        {"id": "c", "label": "C", "group": "outer"},
        {"id": "d", "label": "D"},
    ],
    "edges": [
        {"from": "a", "to": "b"},
        {"from": "b", "to": "c"},
        {"from": "c", "to": "d", "label": "out"},
    ],
    "groups": [
        {"id": "outer", "label": "Outer"},
        {"id": "inner", "label": "Inner", "parent": "outer"},
    ],
}


@pytest.fixture
def simple_data():
    """Two nodes and one edge, as raw JSON data."""
    return copy.deepcopy(SIMPLE)


@pytest.fixture
def nested_data():
    """Two levels of groups plus an ungrouped node."""
    return copy.deepcopy(NESTED)


@pytest.fixture
def describe():
    """Validate raw data and return the DiagramDescription (fails the test if invalid)."""
    def _describe(data):
        result = validate_description(data)
        assert result.ok, result.errors
        return result.diagram
    return _describe


@pytest.fixture
def build(describe):
    """Validate raw data and build a GraphModel from it."""
    def _build(data):
        return build_graph(describe(data))
    return _build
