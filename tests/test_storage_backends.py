"""
Tests for storage backends.
"""

import json
from unittest.mock import patch

import pytest

from geopaths.storage import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    UserStorageStore,
    create_store,
)


class TestJsonFileStore:
    """Tests for JsonFileStore file-based storage."""

    @pytest.fixture
    def store_file(self, tmp_path):
        return tmp_path / "db" / "paths_store.json"

    def test_missing_file_reads_as_empty(self, store_file):
        store = JsonFileStore(store_file)
        assert store.get("paths") is None
        assert not store_file.exists()

    def test_set_creates_file_and_parents(self, store_file):
        store = JsonFileStore(store_file)
        store.set("paths", "[]")

        assert store_file.exists()
        with store_file.open("r", encoding="utf-8") as f:
            assert json.load(f) == {"paths": "[]"}

    def test_set_and_reload(self, store_file):
        JsonFileStore(store_file).set("paths", "value")
        # New instance reads from disk
        assert JsonFileStore(store_file).get("paths") == "value"

    def test_set_keeps_other_keys(self, store_file):
        store = JsonFileStore(store_file)
        store.set("a", "1")
        store.set("b", "2")
        assert store.get("a") == "1"
        assert store.get("b") == "2"

    def test_delete(self, store_file):
        store = JsonFileStore(store_file)
        store.set("paths", "value")
        store.delete("paths")
        store.delete("never-set")
        assert store.get("paths") is None

    def test_corrupt_file_reads_as_empty(self, store_file):
        store_file.parent.mkdir(parents=True)
        store_file.write_text("{not json", encoding="utf-8")
        assert JsonFileStore(store_file).get("paths") is None

    def test_invalid_utf8_file_reads_as_empty(self, store_file):
        store_file.parent.mkdir(parents=True)
        store_file.write_bytes(b'{"paths": "\xff\xfe"}')
        store = JsonFileStore(store_file)
        assert store.get("paths") is None
        # still writable afterwards
        store.set("paths", "[]")
        assert store.get("paths") == "[]"

    def test_non_object_file_reads_as_empty(self, store_file):
        store_file.parent.mkdir(parents=True)
        store_file.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileStore(store_file).get("paths") is None

    def test_no_temp_file_left_behind(self, store_file):
        JsonFileStore(store_file).set("paths", "value")
        assert [p.name for p in store_file.parent.iterdir()] == ["paths_store.json"]

    def test_backend_info(self, store_file):
        store = JsonFileStore(store_file)
        assert store.backend_type == "file"
        assert store.description == str(store_file)


class TestMappingStores:

    def test_memory_store(self):
        store = MemoryStore()
        assert store.get("paths") is None
        store.set("paths", "x")
        assert store.get("paths") == "x"
        store.delete("paths")
        assert store.get("paths") is None
        assert store.backend_type == "memory"

    def test_memory_stores_are_independent(self):
        a, b = MemoryStore(), MemoryStore()
        a.set("paths", "x")
        assert b.get("paths") is None

    def test_user_storage_wraps_mapping(self):
        storage = {}
        store = UserStorageStore(storage)
        store.set("paths", "x")
        assert storage == {"paths": "x"}
        assert store.backend_type == "browser"
        assert store.description == "browser storage"

    def test_user_storage_defaults_to_nicegui_user_storage(self):
        storage = {"paths": "stored"}
        with patch("nicegui.app") as mock_app:
            mock_app.storage.user = storage
            store = UserStorageStore()
        assert store.get("paths") == "stored"


class TestProtocolConformance:

    @pytest.mark.parametrize("store", [
        MemoryStore(),
        UserStorageStore({}),
        JsonFileStore("unused.json"),
    ])
    def test_backends_implement_protocol(self, store):
        assert isinstance(store, KeyValueStore)


class TestFactory:

    def test_create_file_store(self, tmp_path):
        store = create_store("file", file_path=tmp_path / "s.json")
        assert isinstance(store, JsonFileStore)
        assert store.file_path == tmp_path / "s.json"

    def test_create_memory_store(self):
        assert isinstance(create_store("memory"), MemoryStore)

    def test_create_browser_store(self):
        storage = {}
        store = create_store("browser", user_storage=storage)
        assert isinstance(store, UserStorageStore)

    def test_backend_name_is_normalized(self):
        assert isinstance(create_store("  MEMORY "), MemoryStore)

    def test_unknown_backend_falls_back_to_browser(self):
        store = create_store("s3", user_storage={})
        assert isinstance(store, UserStorageStore)

    def test_backend_from_configuration(self, tmp_path):
        with patch("geopaths.config.get_storage_backend", return_value="file"), \
             patch("geopaths.config.get_storage_file", return_value=str(tmp_path / "cfg.json")):
            store = create_store()
        assert isinstance(store, JsonFileStore)
        assert store.file_path == tmp_path / "cfg.json"
