"""Tests for the key-value store implementations."""

import pytest

from daily_pulse.storage import JsonFileStore, MemoryStore


@pytest.fixture(params=["memory", "json"])
def kv(request, tmp_path):
    if request.param == "memory":
        return MemoryStore()
    return JsonFileStore(tmp_path / "data")


def test_missing_key_returns_default(kv):
    assert kv.get("absent") is None
    assert kv.get("absent", []) == []


def test_set_get_delete(kv):
    kv.set("user_abc_repo", [{"id": "1", "title": "新智元"}])
    assert kv.get("user_abc_repo") == [{"id": "1", "title": "新智元"}]

    kv.delete("user_abc_repo")
    assert kv.get("user_abc_repo") is None


def test_delete_missing_key_is_noop(kv):
    kv.delete("never-set")


def test_last_write_wins(kv):
    kv.set("k", 1)
    kv.set("k", 2)
    assert kv.get("k") == 2


def test_json_store_persists_across_instances(tmp_path):
    JsonFileStore(tmp_path).set("current_user_id", "abc")
    assert JsonFileStore(tmp_path).get("current_user_id") == "abc"


def test_json_store_corrupt_file_reads_as_default(tmp_path):
    store = JsonFileStore(tmp_path)
    (tmp_path / "users.json").write_text("{not json", encoding="utf-8")
    assert store.get("users", []) == []


def test_json_store_sanitizes_keys(tmp_path):
    store = JsonFileStore(tmp_path)
    store.set("../escape", True)
    assert store.get("../escape") is True
    assert not (tmp_path.parent / "escape.json").exists()


def test_json_store_rejects_empty_key(tmp_path):
    with pytest.raises(ValueError):
        JsonFileStore(tmp_path).get("")


def test_json_store_failed_write_keeps_previous_value(tmp_path, monkeypatch):
    store = JsonFileStore(tmp_path)
    store.set("k", {"v": 1})

    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("daily_pulse.storage.json_store.os.replace", failing_replace)
    with pytest.raises(OSError, match="disk full"):
        store.set("k", {"v": 2})
    monkeypatch.undo()

    assert store.get("k") == {"v": 1}
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]
