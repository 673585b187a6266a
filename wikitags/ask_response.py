# wiki_bank_tags/wikitags/ask_response.py
"""Decode Semantic MediaWiki ask responses into item identifiers.

A successful category query has the shape::

    {"query": {"results": {"<page title>": {"printouts": {"All Item ID": [4151, ...]}}}}}

Identifiers are flattened in result order, then list order. Duplicates are
kept. When a query matches nothing the wiki sends ``"results": []`` instead
of an empty object, so both forms count as "no results".
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping

from .ask_query import DEFAULT_PRINTOUT
from .errors import MalformedResponse


def parse_item_ids(text: str, *, printout: str = DEFAULT_PRINTOUT) -> List[int]:
    """Return every identifier listed under ``printout``, or raise ``MalformedResponse``."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise MalformedResponse(f"Response is not valid JSON: {exc}") from exc

    results = _extract_results(payload)
    item_ids: List[int] = []
    for key, entry in results.items():
        item_ids.extend(_entry_item_ids(key, entry, printout))
    return item_ids


def _extract_results(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponse("Ask response must be a JSON object.")
    query = payload.get("query")
    if not isinstance(query, dict):
        raise MalformedResponse("Ask response is missing the 'query' object.")
    if "results" not in query:
        raise MalformedResponse("Ask response is missing 'query.results'.")
    results = query["results"]
    if results == []:
        return {}
    if not isinstance(results, dict):
        raise MalformedResponse("'query.results' must be a JSON object.")
    return results


def _entry_item_ids(key: str, entry: Any, printout: str) -> List[int]:
    if not isinstance(entry, dict) or not isinstance(entry.get("printouts"), dict):
        raise MalformedResponse(f"Result {key!r} has no printouts.")
    values = entry["printouts"].get(printout)
    if not isinstance(values, list):
        raise MalformedResponse(f"Result {key!r} has no {printout!r} list.")
    item_ids: List[int] = []
    for value in values:
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MalformedResponse(f"Result {key!r} lists invalid item id {value!r}.")
        item_ids.append(value)
    return item_ids


__all__ = ["parse_item_ids"]
