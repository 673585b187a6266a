# wiki_bank_tags/wikitags/__init__.py
"""Tag bank items from Old School RuneScape wiki categories."""

from . import (
    ask_query,
    ask_response,
    category_tags,
    commands,
    config_store,
    errors,
    tab_registry,
    tag_store,
    text,
)

__all__ = [
    "ask_query",
    "ask_response",
    "category_tags",
    "commands",
    "config_store",
    "errors",
    "tab_registry",
    "tag_store",
    "text",
]
