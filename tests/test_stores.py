"""Tests for name and settings persistence."""

import pytest
import yaml

from undercover.storage.stores import MemoryStore, Settings, YamlStore


class TestMemoryStore:
    """Unit tests for the in-memory store."""

    def test_defaults(self):
        """Test a fresh store has no names and every flag off."""
        store = MemoryStore()
        assert store.get_names() is None
        assert store.get_settings() == Settings()
        assert not store.get_settings().hints_enabled

    def test_names(self):
        """Test names can be saved and cleared."""
        store = MemoryStore()
        store.set_names(["A", "B"])
        assert store.get_names() == ["A", "B"]
        store.clear_names()
        assert store.get_names() is None

    def test_returned_names_are_copies(self):
        """Test callers cannot mutate stored names through the result."""
        store = MemoryStore(names=["A"])
        store.get_names().append("B")
        assert store.get_names() == ["A"]

    def test_set_flag(self):
        """Test flags can be switched on and off."""
        store = MemoryStore()
        store.set_flag("timed_flip_enabled", True)
        assert store.get_settings().timed_flip_enabled
        store.set_flag("timed_flip_enabled", False)
        assert not store.get_settings().timed_flip_enabled

    def test_unknown_flag(self):
        """Test an unknown flag name is rejected."""
        with pytest.raises(ValueError):
            MemoryStore().set_flag("dark_mode", True)


class TestYamlStore:
    """Unit tests for the YAML file store."""

    def test_missing_file_defaults(self, tmp_path):
        """Test a store with no file reads as empty."""
        store = YamlStore(tmp_path / "store.yaml")
        assert store.get_names() is None
        assert store.get_settings() == Settings()

    def test_persists_across_instances(self, tmp_path):
        """Test names and flags survive reopening the file."""
        path = tmp_path / "nested" / "store.yaml"
        store = YamlStore(path)
        store.set_names(["Al", "Player 2", "Bo"])
        store.set_flag("hints_enabled", True)

        reopened = YamlStore(path)
        assert reopened.get_names() == ["Al", "Player 2", "Bo"]
        assert reopened.get_settings().hints_enabled
        assert not reopened.get_settings().custom_player_names_enabled

    def test_clear_names_persists(self, tmp_path):
        """Test clearing names removes them from the file."""
        path = tmp_path / "store.yaml"
        store = YamlStore(path)
        store.set_names(["A"])
        store.clear_names()

        with open(path) as f:
            data = yaml.safe_load(f)
        assert "player_names" not in data
        assert YamlStore(path).get_names() is None

    def test_reads_existing_file(self, tmp_path):
        """Test a hand-written file is understood."""
        path = tmp_path / "store.yaml"
        path.write_text(
            "player_names:\n  - Ann\n  - Bo\n"
            "settings:\n  custom_player_names_enabled: true\n"
        )
        store = YamlStore(path)
        assert store.get_names() == ["Ann", "Bo"]
        assert store.get_settings().custom_player_names_enabled
