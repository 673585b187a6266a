# wiki_bank_tags/wikitags/text.py
"""Text helpers shared by the tag store and the tab registry."""

from __future__ import annotations

import re
from typing import Iterable, List

_TAG_MARKUP = re.compile(r"<[^>]*>")


def standardize(text: str) -> str:
    """Normalise tag text for use as a persistence key.

    Markup such as ``<col=ff0000>`` is stripped, non-breaking spaces become
    plain spaces, and the result is trimmed and lower-cased. Applying it twice
    gives the same result as applying it once.
    """
    stripped = _TAG_MARKUP.sub("", text)
    return stripped.replace("\u00a0", " ").strip().lower()


def from_csv(value: str) -> List[str]:
    return [segment.strip() for segment in value.split(",") if segment.strip()]


def to_csv(items: Iterable[str]) -> str:
    return ",".join(items)


__all__ = ["standardize", "from_csv", "to_csv"]
