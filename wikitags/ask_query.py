# wiki_bank_tags/wikitags/ask_query.py
"""Build Semantic MediaWiki ``action=ask`` URLs for category lookups.

The category is embedded verbatim. The wiki expects the raw ask syntax
(``[[Category:...]]``, ``|`` separators) in the query string, so nothing is
percent-encoded here.
"""

from __future__ import annotations

DEFAULT_API_URL = "https://oldschool.runescape.wiki/api.php"
DEFAULT_LIMIT = 10_000
DEFAULT_PRINTOUT = "All Item ID"


def create_query_url(
    category: str,
    *,
    api_url: str = DEFAULT_API_URL,
    limit: int = DEFAULT_LIMIT,
    printout: str = DEFAULT_PRINTOUT,
) -> str:
    """Return the ask URL listing ``printout`` for every page in ``category``."""
    printout_param = printout.replace(" ", "+")
    return (
        f"{api_url}?action=ask&query=[[Category:{category}]]"
        f"|+limit={limit}|?{printout_param}&format=json"
    )


__all__ = ["DEFAULT_API_URL", "DEFAULT_LIMIT", "DEFAULT_PRINTOUT", "create_query_url"]
