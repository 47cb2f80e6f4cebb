import json

import pytest

from storefront.errors import CorruptStateError, StorageError
from storefront.storage import JsonFileStore, MemoryStore


def test_file_store_absent_document_is_none(tmp_path):
    assert JsonFileStore(tmp_path / "data").load("menu") is None


def test_file_store_save_creates_directory_and_file(tmp_path):
    store = JsonFileStore(tmp_path / "data")
    store.save("menu", {"items": [{"name": "Crème brûlée"}]})

    path = tmp_path / "data" / "menu.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "items": [{"name": "Crème brûlée"}]
    }
    assert store.load("menu") == {"items": [{"name": "Crème brûlée"}]}


def test_file_store_leaves_no_temp_files(tmp_path):
    store = JsonFileStore(tmp_path)
    store.save("orders", {"orders": []})
    store.save("orders", {"orders": [1]})
    assert sorted(p.name for p in tmp_path.iterdir()) == ["orders.json"]


def test_file_store_corrupt_document(tmp_path):
    (tmp_path / "orders.json").write_text("{\"orders\": [", encoding="utf-8")
    with pytest.raises(CorruptStateError):
        JsonFileStore(tmp_path).load("orders")


def test_file_store_unserializable_data_keeps_old_document(tmp_path):
    store = JsonFileStore(tmp_path)
    store.save("menu", {"items": []})
    with pytest.raises(StorageError):
        store.save("menu", {"items": object()})
    assert store.load("menu") == {"items": []}
    assert sorted(p.name for p in tmp_path.iterdir()) == ["menu.json"]


def test_memory_store_returns_copies():
    store = MemoryStore({"menu": {"items": []}})
    loaded = store.load("menu")
    loaded["items"].append("mutated")
    assert store.load("menu") == {"items": []}


def test_memory_store_absent_and_corrupt():
    store = MemoryStore()
    assert store.load("orders") is None
    store.put_raw("orders", "nope")
    with pytest.raises(CorruptStateError):
        store.load("orders")
