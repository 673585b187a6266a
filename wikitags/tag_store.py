# wiki_bank_tags/wikitags/tag_store.py
"""Apply bank tags to item identifiers.

Tags are kept in the ``banktags`` configuration group, one comma-separated
value per item under ``item_<id>``. Variation tags (``auto_tag=True``) live
under the negated id.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from .config_store import ConfigStore
from .errors import WikiTagError
from .text import from_csv, standardize, to_csv

CONFIG_GROUP = "banktags"
ITEM_KEY_PREFIX = "item_"


class TagStore(Protocol):
    def add_tag(self, item_id: int, tag: str, auto_tag: bool) -> None: ...


class ConfigTagStore:
    """Tag store backed by a :class:`~wikitags.config_store.ConfigStore`."""

    def __init__(self, config_store: ConfigStore):
        self._config = config_store

    def get_tags(self, item_id: int, auto_tag: bool = False) -> List[str]:
        value = self._config.get_configuration(CONFIG_GROUP, _item_key(item_id, auto_tag))
        return from_csv(value or "")

    def add_tag(self, item_id: int, tag: str, auto_tag: bool) -> None:
        tag = standardize(tag)
        if not tag:
            return
        tags = self.get_tags(item_id, auto_tag)
        if tag in tags:
            return
        tags.append(tag)
        self._config.set_configuration(CONFIG_GROUP, _item_key(item_id, auto_tag), to_csv(tags))


def apply_tags(item_ids: Iterable[int], tag: str, store: TagStore) -> int:
    """Tag each identifier in order and return how many were stored.

    A failed store call is logged and the remaining identifiers are still
    tagged.
    """
    applied = 0
    for item_id in item_ids:
        try:
            store.add_tag(item_id, tag, False)
        except WikiTagError as exc:
            logging.error("Could not tag item %d with %r: %s", item_id, tag, exc)
            continue
        applied += 1
    return applied


def _item_key(item_id: int, auto_tag: bool) -> str:
    return f"{ITEM_KEY_PREFIX}{-item_id if auto_tag else item_id}"


__all__ = ["CONFIG_GROUP", "TagStore", "ConfigTagStore", "apply_tags"]
