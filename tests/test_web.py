"""Tests for the HTTP preview service."""
import pytest
from fastapi.testclient import TestClient

from necrosis.config import Config, DefaultsConfig
from necrosis.web.app import create_app


@pytest.fixture
def client():
    config = Config(defaults=DefaultsConfig(size=6, iterations=8, turtles=2, rooms=2, seed=11))
    return TestClient(create_app(config=config))


class TestDungeonEndpoint:
    """Cached dungeon per origin."""

    def test_dungeon_is_cached(self, client):
        first = client.get("/api/dungeon", params={"x": 1, "y": 2, "z": 3})
        second = client.get("/api/dungeon", params={"x": 1, "y": 2, "z": 3})
        assert first.status_code == 200
        assert first.json() == second.json()
        assert first.json()["origin"] == [1, 2, 3]
        assert first.json()["size"] == 6

    def test_index_renders_ascii(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "<pre>" in response.text
        assert "-- level" in response.text


class TestPreviewEndpoint:
    """Parameterized previews."""

    def test_seeded_preview_is_repeatable(self, client):
        params = {"size": 7, "iterations": 12, "turtles": 3, "rooms": 2, "seed": 4}
        first = client.get("/api/preview", params=params)
        second = client.get("/api/preview", params=params)
        assert first.status_code == 200
        assert first.json() == second.json()
        assert first.json()["size"] == 7
        assert first.json()["stats"]["turtles_spawned"] == 3

    def test_ascii_preview(self, client):
        response = client.get("/api/preview", params={"format": "ascii", "seed": 1})
        assert response.status_code == 200
        assert response.text.startswith("-- level 5 --")

    def test_invalid_parameter(self, client):
        response = client.get("/api/preview", params={"size": -1})
        assert response.status_code == 400
        assert "size" in response.json()["detail"]

    def test_unknown_format(self, client):
        response = client.get("/api/preview", params={"format": "xml"})
        assert response.status_code == 400

    def test_non_integer_query(self, client):
        response = client.get("/api/preview", params={"size": "huge"})
        assert response.status_code == 422
