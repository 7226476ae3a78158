"""Persistence for player names and settings flags."""

from pathlib import Path
from typing import Optional, Protocol, Union

import yaml
from pydantic import BaseModel


class Settings(BaseModel):
    """Persisted on/off switches, all off by default."""
    hints_enabled: bool = False
    timed_flip_enabled: bool = False
    custom_player_names_enabled: bool = False


class NameStore(Protocol):
    def get_names(self) -> Optional[list[str]]: ...

    def set_names(self, names: list[str]) -> None: ...

    def clear_names(self) -> None: ...


class SettingsStore(Protocol):
    def get_settings(self) -> Settings: ...

    def set_flag(self, name: str, value: bool) -> None: ...


def _check_flag(name: str) -> None:
    if name not in Settings.model_fields:
        raise ValueError(
            f"Unknown setting: {name}. Available: {list(Settings.model_fields)}"
        )


class MemoryStore:
    """Names and settings kept in memory only."""

    def __init__(
        self,
        names: Optional[list[str]] = None,
        settings: Optional[Settings] = None,
    ):
        self._names = list(names) if names is not None else None
        self._settings = settings or Settings()

    def get_names(self) -> Optional[list[str]]:
        return list(self._names) if self._names is not None else None

    def set_names(self, names: list[str]) -> None:
        self._names = list(names)

    def clear_names(self) -> None:
        self._names = None

    def get_settings(self) -> Settings:
        return self._settings.model_copy()

    def set_flag(self, name: str, value: bool) -> None:
        _check_flag(name)
        self._settings = self._settings.model_copy(update={name: bool(value)})


class YamlStore(MemoryStore):
    """Names and settings persisted to a YAML file.

    The file holds ``player_names`` (a list of strings, or absent) and
    ``settings`` (a mapping of flags). It is rewritten on every change.
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the store.

        Args:
            path: YAML file location. Created on first write.
        """
        self.path = Path(path)
        data = {}
        if self.path.exists():
            with open(self.path) as f:
                data = yaml.safe_load(f) or {}

        names = data.get("player_names")
        super().__init__(
            names=[str(n) for n in names] if names is not None else None,
            settings=Settings.model_validate(data.get("settings") or {}),
        )

    def set_names(self, names: list[str]) -> None:
        super().set_names(names)
        self._save()

    def clear_names(self) -> None:
        super().clear_names()
        self._save()

    def set_flag(self, name: str, value: bool) -> None:
        super().set_flag(name, value)
        self._save()

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"settings": self._settings.model_dump()}
        if self._names is not None:
            data["player_names"] = self._names
        with open(self.path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)
