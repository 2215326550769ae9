"""Tests for the JSON key-value device store."""

import json

from aquamate.services.storage import LocalStore, get_store


def test_set_get_remove(tmp_path):
    store = LocalStore(str(tmp_path / "defaults.json"))

    assert store.get("missing") is None
    assert store.get("missing", default=[]) == []

    store.set("answer", {"value": 42})
    assert store.get("answer") == {"value": 42}

    store.remove("answer")
    assert store.get("answer") is None


def test_set_overwrites_whole_value(tmp_path):
    store = LocalStore(str(tmp_path / "defaults.json"))
    store.set("items", [1, 2, 3])
    store.set("items", [4])
    assert store.get("items") == [4]


def test_read_after_write_sees_write_through_cache(tmp_path):
    store = LocalStore(str(tmp_path / "defaults.json"), cache_ttl=3600)
    store.set("k", "first")
    assert store.get("k") == "first"  # now cached
    store.set("k", "second")
    assert store.get("k") == "second"


def test_keys_are_independent(tmp_path):
    path = tmp_path / "defaults.json"
    store = LocalStore(str(path))
    store.set("a", 1)
    store.set("b", 2)
    store.remove("a")

    assert store.get("b") == 2
    assert json.loads(path.read_text(encoding="utf-8")) == {"b": 2}


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "defaults.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(str(path))

    assert store.get("anything") is None

    # A write replaces the corrupt file with a valid one
    store.set("fresh", True)
    assert json.loads(path.read_text(encoding="utf-8")) == {"fresh": True}


def test_non_object_file_reads_as_empty(tmp_path):
    path = tmp_path / "defaults.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert LocalStore(str(path)).get("x") is None


def test_app_store_lives_in_data_dir(app, tmp_path):
    assert get_store().path == str(tmp_path / "defaults.json")
