"""Tests for the HTTP service."""

import pytest
from fastapi.testclient import TestClient

from drawio_gen.api import app
from drawio_gen.export import decode_drawio_svg


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_svg(client, simple_data):
    response = client.post("/api/generate", json=simple_data)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.headers["x-drawio-warnings"] == "0"
    assert decode_drawio_svg(response.text).startswith("<mxfile")


def test_generate_drawio(client, simple_data):
    response = client.post("/api/generate", params={"format": "drawio"}, json=simple_data)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    assert response.text.startswith("<mxfile")


def test_generate_counts_warnings(client):
    response = client.post("/api/generate", json={"nodes": [{"id": "a", "type": "nope.nothing"}]})

    assert response.status_code == 200
    assert response.headers["x-drawio-warnings"] == "1"


def test_generate_rejects_bad_description(client):
    response = client.post("/api/generate", json={"nodes": [{"id": "a"}, {"id": "a"}]})

    assert response.status_code == 400
    assert response.json()["errors"] == ['Duplicate node ID: "a"']


def test_generate_rejects_unknown_format(client, simple_data):
    response = client.post("/api/generate", params={"format": "png"}, json=simple_data)
    assert response.status_code == 422


def test_validate(client):
    response = client.post("/api/validate", json={"xml": "<mxGraphModel/>"})

    assert response.status_code == 200
    body = response.json()
    assert body["valid"] is False
    assert "Missing <mxfile> wrapper element" in body["errors"]


def test_shapes(client):
    categories = client.get("/api/shapes").json()["categories"]
    assert "aws" in categories

    shapes = client.get("/api/shapes", params={"category": "aws"}).json()["shapes"]
    assert "aws.lambda" in shapes


def test_shapes_unknown_category(client):
    assert client.get("/api/shapes", params={"category": "nonsense"}).status_code == 404


def test_themes(client):
    themes = client.get("/api/themes").json()["themes"]
    assert {"professional", "blueprint"} <= {t["name"] for t in themes}


def test_schema(client):
    schema = client.get("/api/schema").json()
    assert "nodes" in schema["required"]
