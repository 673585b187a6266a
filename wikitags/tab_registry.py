# wiki_bank_tags/wikitags/tab_registry.py
"""Persisted list of bank tag tabs and their icons.

Registration reads the tab list and then writes it back, so two concurrent
registrations can lose one of the appends (last write wins). Callers that
run invocations in parallel must serialise them.
"""

from __future__ import annotations

import logging
from typing import List

from .config_store import ConfigStore
from .errors import PersistError
from .tag_store import CONFIG_GROUP
from .text import from_csv, standardize, to_csv

TAG_TABS_CONFIG = "tagtabs"
ICON_SEARCH = "icon_"


class TabRegistry:
    def __init__(self, config_store: ConfigStore):
        self._config = config_store

    def list_tabs(self) -> List[str]:
        return from_csv(self._config.get_configuration(CONFIG_GROUP, TAG_TABS_CONFIG) or "")

    def get_icon(self, tag: str) -> int | None:
        value = self._config.get_configuration(CONFIG_GROUP, ICON_SEARCH + standardize(tag))
        return int(value) if value is not None else None

    def register_tab(self, tag: str, icon_item_id: int) -> None:
        """Append ``tag`` to the tab list and record its icon.

        The tab is appended even when it is already listed. The two writes
        are independent: if the icon write fails, the tab name stays.
        """
        tag = standardize(tag)
        tabs = self.list_tabs()
        tabs.append(tag)
        try:
            self._config.set_configuration(CONFIG_GROUP, TAG_TABS_CONFIG, to_csv(tabs))
            self._config.set_configuration(CONFIG_GROUP, ICON_SEARCH + tag, icon_item_id)
        except PersistError:
            raise
        except Exception as exc:
            raise PersistError(f"Failed to register tab {tag!r}: {exc}") from exc
        logging.info("Registered tab %r with icon item %d", tag, icon_item_id)


__all__ = ["TAG_TABS_CONFIG", "ICON_SEARCH", "TabRegistry"]
