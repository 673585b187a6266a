# wiki_bank_tags/wikitags/category_tags.py
"""Tag every item in a wiki category and give the tag its own bank tab.

Each call of :meth:`CategoryTagger.resolve_and_tag` runs four steps in order:

1. build the ask URL for the category (:mod:`wikitags.ask_query`);
2. fetch it, where a failed request counts as an empty result;
3. decode the identifiers (:mod:`wikitags.ask_response`), where a malformed
   body also counts as empty;
4. tag each identifier and register a tab whose icon is the lowest id.

Typical usage
-------------
```python
from pathlib import Path
from wikitags.category_tags import CategoryTagConfig, run

config = CategoryTagConfig(store_path=Path("bank_tags.yaml"))
outcome = run(config, "Runite equipment")
print(outcome.message)
```

The user-facing text treats "no items" and "malformed response" the same
way. :attr:`Outcome.malformed` keeps them apart for callers that care. A
failed tab write is recorded in :attr:`Outcome.tab_error`; the tags already
applied stay in place.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from http.client import HTTPException
from pathlib import Path
from typing import Callable, List, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from .ask_query import DEFAULT_API_URL, DEFAULT_LIMIT, DEFAULT_PRINTOUT, create_query_url
from .ask_response import parse_item_ids
from .config_store import YamlConfigStore
from .errors import MalformedResponse, NetworkError, PersistError
from .tab_registry import TabRegistry
from .tag_store import ConfigTagStore, TagStore, apply_tags

FETCH_ERROR_MESSAGE = "There was an error retrieving data"

# Ask syntax characters that must reach the wiki unescaped.
_URL_SAFE = ":/?&=[]|+,%"

Fetcher = Callable[[str], str]


@dataclass
class CategoryTagConfig:
    """Typed view of the ``category_tags`` step configuration."""

    store_path: Path
    api_url: str = DEFAULT_API_URL
    limit: int = DEFAULT_LIMIT
    printout: str = DEFAULT_PRINTOUT
    chat_command: str = "wikibt"
    user_agent: str = "wiki-bank-tags/0.1"
    timeout: float | None = None
    create_tab: bool = True


class OutcomeStatus(enum.Enum):
    NO_ITEMS_FOUND = "no_items_found"
    TAGGED = "tagged"


@dataclass
class Outcome:
    """Result of resolving and tagging one category."""

    category: str
    status: OutcomeStatus
    item_ids: Sequence[int] = field(default_factory=tuple)
    icon_item_id: Optional[int] = None
    fetch_error: Optional[str] = None
    malformed: bool = False
    tab_error: Optional[str] = None
    store_error: Optional[str] = None

    @property
    def tagged_count(self) -> int:
        return len(self.item_ids) if self.status is OutcomeStatus.TAGGED else 0

    @property
    def failed(self) -> bool:
        return self.tab_error is not None or self.store_error is not None

    @property
    def messages(self) -> List[str]:
        """Chat lines to show the user, in posting order."""
        lines: List[str] = []
        if self.fetch_error is not None:
            lines.append(FETCH_ERROR_MESSAGE)
        if self.store_error is not None:
            lines.append(f"Could not update bank tags for category {self.category}")
        elif self.status is OutcomeStatus.TAGGED:
            lines.append(f"Added {self.category} tag to {self.tagged_count} items.")
            if self.tab_error is not None:
                lines.append(f"Could not create the {self.category} tab")
        else:
            lines.append(f"No items found for category {self.category}")
        return lines

    @property
    def message(self) -> str:
        return self.messages[0]


def fetch_text(url: str, *, user_agent: str = "wiki-bank-tags/0.1", timeout: float | None = None) -> str:
    """GET ``url`` and return the decoded body.

    Characters the HTTP transport rejects (spaces, non-ASCII) are
    percent-encoded; ask syntax is left alone. Transport failures raise
    ``NetworkError`` and undecodable bodies raise ``MalformedResponse``.
    """
    request_url = quote(url, safe=_URL_SAFE)
    kwargs = {"timeout": timeout} if timeout is not None else {}
    try:
        request = Request(request_url, headers={"User-Agent": user_agent})
        with urlopen(request, **kwargs) as response:
            data = response.read()
            try:
                encoding = response.headers.get_content_charset("utf-8")
            except AttributeError:
                encoding = "utf-8"
    except (HTTPError, URLError, HTTPException, OSError, ValueError) as exc:
        raise NetworkError(f"Failed to fetch {request_url}: {exc}") from exc
    try:
        return data.decode(encoding or "utf-8")
    except (UnicodeDecodeError, LookupError) as exc:
        raise MalformedResponse(f"Response from {request_url} could not be decoded: {exc}") from exc


class CategoryTagger:
    """Resolve wiki categories into tagged items and bank tabs."""

    def __init__(
        self,
        fetcher: Fetcher,
        tag_store: TagStore,
        tab_registry: TabRegistry,
        *,
        api_url: str = DEFAULT_API_URL,
        limit: int = DEFAULT_LIMIT,
        printout: str = DEFAULT_PRINTOUT,
        create_tab: bool = True,
    ):
        self._fetch = fetcher
        self._tag_store = tag_store
        self._tab_registry = tab_registry
        self.api_url = api_url
        self.limit = limit
        self.printout = printout
        self.create_tab = create_tab

    def query_url(self, category: str) -> str:
        return create_query_url(category, api_url=self.api_url, limit=self.limit, printout=self.printout)

    def resolve_and_tag(self, category: str) -> Outcome:
        """Tag every item in ``category``.

        Network, decoding and tab persistence failures are absorbed into the
        outcome. Tags applied before a failed tab write are kept.
        """
        logging.info("Attempting to add tags to items from %s", category)
        url = self.query_url(category)

        try:
            item_ids = parse_item_ids(self._fetch(url), printout=self.printout)
        except NetworkError as exc:
            logging.error("Fetching category %r failed: %s", category, exc)
            return Outcome(category=category, status=OutcomeStatus.NO_ITEMS_FOUND, fetch_error=str(exc))
        except MalformedResponse as exc:
            logging.warning("Malformed ask response for %r: %s", category, exc)
            return Outcome(category=category, status=OutcomeStatus.NO_ITEMS_FOUND, malformed=True)

        if not item_ids:
            logging.info("No items found for category %s", category)
            return Outcome(category=category, status=OutcomeStatus.NO_ITEMS_FOUND)

        apply_tags(item_ids, category, self._tag_store)
        icon_item_id = min(item_ids)
        tab_error: Optional[str] = None
        if self.create_tab:
            try:
                self._tab_registry.register_tab(category, icon_item_id)
            except PersistError as exc:
                logging.error("Could not create tab for %r: %s", category, exc)
                tab_error = str(exc)
        logging.info("Tagged %d items with %r", len(item_ids), category)
        return Outcome(
            category=category,
            status=OutcomeStatus.TAGGED,
            item_ids=tuple(item_ids),
            icon_item_id=icon_item_id,
            tab_error=tab_error,
        )


def build_tagger(config: CategoryTagConfig, fetcher: Fetcher | None = None) -> CategoryTagger:
    """Wire a :class:`CategoryTagger` to a YAML store and the HTTP fetcher."""
    store = YamlConfigStore(config.store_path)

    def _http_fetch(url: str) -> str:
        return fetch_text(url, user_agent=config.user_agent, timeout=config.timeout)

    return CategoryTagger(
        fetcher or _http_fetch,
        ConfigTagStore(store),
        TabRegistry(store),
        api_url=config.api_url,
        limit=config.limit,
        printout=config.printout,
        create_tab=config.create_tab,
    )


def run(config: CategoryTagConfig, category: str, fetcher: Fetcher | None = None) -> Outcome:
    """Resolve and tag ``category`` using the stores described by ``config``."""
    return build_tagger(config, fetcher).resolve_and_tag(category)


__all__ = [
    "FETCH_ERROR_MESSAGE",
    "CategoryTagConfig",
    "CategoryTagger",
    "Outcome",
    "OutcomeStatus",
    "build_tagger",
    "fetch_text",
    "run",
]
