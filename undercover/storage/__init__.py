"""Name and settings persistence."""

from .stores import MemoryStore, NameStore, Settings, SettingsStore, YamlStore

__all__ = ["MemoryStore", "NameStore", "Settings", "SettingsStore", "YamlStore"]
