"""Unit tests for client storage backends."""
import json

import pytest

from mentor.storage import (
    ClientStorage,
    InMemoryClientStorage,
    JSONFileClientStorage,
    create_client_storage,
)


class TestClientStorageInterface:
    """Tests for the abstract ClientStorage interface."""

    def test_storage_is_abstract(self):
        """Test that ClientStorage cannot be instantiated directly."""
        with pytest.raises(TypeError):
            ClientStorage()  # type: ignore


class TestInMemoryClientStorage:
    """Tests for InMemoryClientStorage."""

    def test_set_get_remove(self):
        """Test the basic key-value operations."""
        storage = InMemoryClientStorage()
        storage.set_item("k", "v")

        assert storage.get_item("k") == "v"
        assert storage.keys() == ["k"]

        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_remove_missing_key(self):
        """Test that removing an absent key is a no-op."""
        InMemoryClientStorage().remove_item("missing")

    def test_initial_values_are_copied(self):
        """Test that the initial mapping is not shared."""
        initial = {"k": "v"}
        storage = InMemoryClientStorage(initial)
        storage.set_item("k", "changed")
        assert initial == {"k": "v"}


class TestJSONFileClientStorage:
    """Tests for JSONFileClientStorage."""

    def test_values_survive_reopen(self, tmp_path):
        """Test that values are written through to the file."""
        path = tmp_path / "nested" / "storage.json"
        JSONFileClientStorage(path).set_item("appTheme", "Aurora")

        assert JSONFileClientStorage(path).get_item("appTheme") == "Aurora"
        assert json.loads(path.read_text(encoding="utf-8")) == {"appTheme": "Aurora"}

    def test_remove_is_persisted(self, tmp_path):
        """Test that removals reach the file."""
        path = tmp_path / "storage.json"
        storage = JSONFileClientStorage(path)
        storage.set_item("a", "1")
        storage.set_item("b", "2")
        storage.remove_item("a")

        assert JSONFileClientStorage(path).keys() == ["b"]

    def test_missing_file_is_empty(self, tmp_path):
        """Test that a missing file means empty storage."""
        storage = JSONFileClientStorage(tmp_path / "absent.json")
        assert storage.keys() == []
        assert not (tmp_path / "absent.json").exists()

    @pytest.mark.parametrize("content", ["not json", "[1, 2]"])
    def test_unreadable_file_is_ignored(self, tmp_path, content):
        """Test that a corrupt file starts empty instead of failing."""
        path = tmp_path / "storage.json"
        path.write_text(content, encoding="utf-8")

        assert JSONFileClientStorage(path).keys() == []

    def test_non_string_values_are_dropped(self, tmp_path):
        """Test that only string values are loaded."""
        path = tmp_path / "storage.json"
        path.write_text(json.dumps({"ok": "yes", "bad": 3}), encoding="utf-8")

        assert JSONFileClientStorage(path).keys() == ["ok"]


class TestCreateClientStorage:
    """Tests for create_client_storage factory."""

    def test_create_memory(self):
        """Test creating the in-memory backend."""
        assert create_client_storage("memory").backend_type == "memory"

    def test_create_json(self, tmp_path):
        """Test creating the JSON file backend."""
        storage = create_client_storage("json", path=tmp_path / "s.json")
        assert storage.backend_type == "json"

    def test_unsupported_backend_raises_error(self):
        """Test that unsupported backend raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported storage backend"):
            create_client_storage("redis")
