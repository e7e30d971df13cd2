"""Tests for the file-based key-value store."""

import pytest

from daybook.adapters.file_store import FileKeyValueStore


class TestFileKeyValueStore:
    def test_creates_directory(self, tmp_path):
        store = FileKeyValueStore(tmp_path / "nested" / "data")
        assert store.data_dir.is_dir()

    def test_missing_key(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        assert store.get("todo.advanced.v1") is None

    def test_set_and_get(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("todo.advanced.v1", '{"tasks": []}')
        assert store.get("todo.advanced.v1") == '{"tasks": []}'
        assert (tmp_path / "todo.advanced.v1").read_text() == '{"tasks": []}'

    def test_set_overwrites_and_leaves_no_temp_files(self, tmp_path):
        store = FileKeyValueStore(tmp_path)
        store.set("favorites", "[1]")
        store.set("favorites", "[2]")
        assert store.get("favorites") == "[2]"
        assert [p.name for p in tmp_path.iterdir()] == ["favorites"]

    @pytest.mark.parametrize("key", ["", "..", "a/b", "a\\b"])
    def test_rejects_path_like_keys(self, tmp_path, key):
        with pytest.raises(ValueError):
            FileKeyValueStore(tmp_path).get(key)
