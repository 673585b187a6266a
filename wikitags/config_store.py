# wiki_bank_tags/wikitags/config_store.py
"""Grouped key/value configuration storage.

The tag store and the tab registry only need ``get_configuration`` and
``set_configuration``. :class:`YamlConfigStore` provides both on top of a
YAML file laid out as ``{group: {key: value}}``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol

import yaml

from .errors import PersistError


class ConfigStore(Protocol):
    def get_configuration(self, group: str, key: str) -> Optional[str]: ...

    def set_configuration(self, group: str, key: str, value: object) -> None: ...


class YamlConfigStore:
    """Configuration store persisted to a single YAML document."""

    def __init__(self, path: Path):
        self.path = path

    def get_configuration(self, group: str, key: str) -> Optional[str]:
        value = self._load().get(group, {}).get(key)
        return None if value is None else str(value)

    def set_configuration(self, group: str, key: str, value: object) -> None:
        try:
            data = self._load()
            data.setdefault(group, {})[key] = str(value)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(data, handle, sort_keys=True, allow_unicode=True)
        except (OSError, yaml.YAMLError) as exc:
            raise PersistError(f"Failed to write {group}.{key} to {self.path}: {exc}") from exc

    def _load(self) -> Dict[str, Dict[str, str]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = yaml.safe_load(handle) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise PersistError(f"Failed to read {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise PersistError(f"Configuration store must be a YAML mapping: {self.path}")
        data: Dict[str, Dict[str, str]] = {}
        for group, values in payload.items():
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise PersistError(f"Group {group!r} in {self.path} must be a mapping.")
            data[str(group)] = dict(values)
        return data


__all__ = ["ConfigStore", "YamlConfigStore"]
