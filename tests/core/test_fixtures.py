"""Fixture loader — seed file parsing for in-memory stores."""

import json
from pathlib import Path

import pytest

from storeapi.infrastructure.fixtures import load_fixture


def test_missing_file_yields_empty(tmp_path):
    assert load_fixture(tmp_path / "nope.json") == {}


def test_loads_collections(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"users": [{"_id": 1, "name": "A"}], "products": []}))
    data = load_fixture(path)
    assert data["users"] == [{"_id": 1, "name": "A"}]
    assert data["products"] == []


@pytest.mark.parametrize("content", ['[1, 2]', '{"users": {"a": 1}}', '{"users": [1]}'])
def test_malformed_fixture_raises(tmp_path, content):
    path = tmp_path / "data.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_fixture(path)


def test_repository_seed_file_is_valid():
    data = load_fixture(Path(__file__).parents[2] / "data.json")
    assert data["products"]
    assert data["users"]
