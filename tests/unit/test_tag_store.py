# wiki_bank_tags/tests/unit/test_tag_store.py
"""Unit tests for tag application."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from wikitags import tag_store
from wikitags.config_store import YamlConfigStore
from wikitags.errors import PersistError


class _MemoryConfig:
    def __init__(self) -> None:
        self.values: Dict[Tuple[str, str], str] = {}
        self.writes = 0

    def get_configuration(self, group: str, key: str) -> Optional[str]:
        return self.values.get((group, key))

    def set_configuration(self, group: str, key: str, value: object) -> None:
        self.writes += 1
        self.values[(group, key)] = str(value)


class _RecordingTagStore:
    def __init__(self) -> None:
        self.calls: List[Tuple[int, str, bool]] = []

    def add_tag(self, item_id: int, tag: str, auto_tag: bool) -> None:
        self.calls.append((item_id, tag, auto_tag))


def test_apply_tags_calls_store_in_order() -> None:
    store = _RecordingTagStore()
    applied = tag_store.apply_tags([50, 10, 30, 10], "Runite equipment", store)
    assert applied == 4
    assert store.calls == [
        (50, "Runite equipment", False),
        (10, "Runite equipment", False),
        (30, "Runite equipment", False),
        (10, "Runite equipment", False),
    ]


def test_config_tag_store_appends_standardized_tag() -> None:
    config = _MemoryConfig()
    store = tag_store.ConfigTagStore(config)
    store.add_tag(1127, "Runite Equipment", False)
    store.add_tag(1127, "Ores", False)

    assert store.get_tags(1127) == ["runite equipment", "ores"]
    assert config.values[("banktags", "item_1127")] == "runite equipment,ores"


def test_config_tag_store_is_idempotent() -> None:
    config = _MemoryConfig()
    store = tag_store.ConfigTagStore(config)
    store.add_tag(1127, "Runite equipment", False)
    store.add_tag(1127, " runite EQUIPMENT ", False)

    assert store.get_tags(1127) == ["runite equipment"]
    assert config.writes == 1


def test_config_tag_store_ignores_blank_tags() -> None:
    config = _MemoryConfig()
    tag_store.ConfigTagStore(config).add_tag(1127, "   ", False)
    assert config.values == {}


def test_config_tag_store_keeps_variation_tags_apart() -> None:
    config = _MemoryConfig()
    store = tag_store.ConfigTagStore(config)
    store.add_tag(1333, "Rune", True)

    assert config.values == {("banktags", "item_-1333"): "rune"}
    assert store.get_tags(1333) == []
    assert store.get_tags(1333, auto_tag=True) == ["rune"]


class _FlakyTagStore(_RecordingTagStore):
    def __init__(self, failing_id: int) -> None:
        super().__init__()
        self.failing_id = failing_id

    def add_tag(self, item_id: int, tag: str, auto_tag: bool) -> None:
        if item_id == self.failing_id:
            raise PersistError("disk full")
        super().add_tag(item_id, tag, auto_tag)


def test_apply_tags_continues_after_store_failure(caplog) -> None:
    store = _FlakyTagStore(failing_id=10)

    with caplog.at_level("ERROR"):
        applied = tag_store.apply_tags([50, 10, 30], "Ores", store)

    assert applied == 2
    assert store.calls == [(50, "Ores", False), (30, "Ores", False)]
    assert "Could not tag item 10" in caplog.text


def test_apply_tags_survives_unwritable_store(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = tag_store.ConfigTagStore(YamlConfigStore(blocker / "bank_tags.yaml"))

    assert tag_store.apply_tags([436], "Ores", store) == 0
