"""Tests for the JSON-file key-value store."""

import json
from unittest.mock import patch

import pytest

from cognitrain.errors import StorageError
from cognitrain.store import DurableStore, LoadError


def test_read_missing_key_returns_none(store):
    assert store.read("scores") is None
    result = store.try_load("scores")
    assert not result.ok
    assert result.error is LoadError.MISSING


def test_write_then_read(store):
    store.write("streak", {"count": 3, "lastDate": "2024-03-09"})
    assert store.read("streak") == {"count": 3, "lastDate": "2024-03-09"}
    assert store.path_for("streak").name == "cognitrain_streak.json"


def test_write_overwrites(store):
    store.write("scores", {"a": []})
    store.write("scores", {"b": []})
    assert store.read("scores") == {"b": []}


def test_corrupt_payload_is_treated_as_absent(store):
    store.data_dir.mkdir(parents=True)
    store.path_for("scores").write_text("{not json", encoding="utf-8")

    result = store.try_load("scores")
    assert result.error is LoadError.CORRUPT
    assert result.value_or({}) == {}
    assert store.read("scores") is None


def test_remove_is_noop_when_absent(store):
    store.remove("settings")
    store.write("settings", {"sound": True})
    store.remove("settings")
    assert store.read("settings") is None
    assert store.keys() == []


def test_keys_are_unprefixed(tmp_path):
    store = DurableStore(tmp_path, prefix="ct_")
    store.write("scores", {})
    store.write("streak", {})
    assert store.keys() == ["scores", "streak"]
    assert json.loads((tmp_path / "ct_scores.json").read_text()) == {}


def test_write_failure_is_raised(store):
    with patch("cognitrain.store.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(StorageError, match="disk full"):
            store.write("scores", {})
    # temp file is cleaned up and nothing was stored
    assert list(store.data_dir.iterdir()) == []


def test_unserializable_value_raises(store):
    with pytest.raises(StorageError):
        store.write("scores", {"x": object()})


def test_deeply_nested_payload_is_corrupt(store):
    store.data_dir.mkdir(parents=True)
    store.path_for("scores").write_text("[" * 100000 + "]" * 100000, encoding="utf-8")

    assert store.try_load("scores").error is LoadError.CORRUPT
    assert store.read("scores") is None


def test_oversized_integer_does_not_escape(store):
    store.data_dir.mkdir(parents=True)
    store.path_for("streak").write_text('{"count": ' + "9" * 5000 + "}", encoding="utf-8")

    # rejected by the int digit limit on interpreters that have one
    result = store.try_load("streak")
    assert result.error in (None, LoadError.CORRUPT)
