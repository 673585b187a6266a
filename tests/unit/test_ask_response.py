# wiki_bank_tags/tests/unit/test_ask_response.py
"""Unit tests for decoding ask responses into item identifiers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wikitags import ask_response
from wikitags.errors import MalformedResponse


ROOT = Path(__file__).resolve().parents[2]
FIXTURES = ROOT / "tests" / "fixtures" / "ask"


def _fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def test_parse_item_ids_flattens_in_result_order() -> None:
    item_ids = ask_response.parse_item_ids(_fixture("runite_equipment.json"))
    assert item_ids == [1127, 1333, 20402, 1163, 1333]


def test_parse_item_ids_skips_empty_printouts() -> None:
    assert ask_response.parse_item_ids(_fixture("two_pages.json")) == [5, 7]


@pytest.mark.parametrize("name", ["empty_results.json", "no_matches.json"])
def test_parse_item_ids_returns_empty_for_no_results(name: str) -> None:
    assert ask_response.parse_item_ids(_fixture(name)) == []


def test_parse_item_ids_keeps_duplicates_across_results() -> None:
    payload = {
        "query": {
            "results": {
                "A": {"printouts": {"All Item ID": [3, 1]}},
                "B": {"printouts": {"All Item ID": [1, 2]}},
            }
        }
    }
    assert ask_response.parse_item_ids(json.dumps(payload)) == [3, 1, 1, 2]


def test_parse_item_ids_uses_requested_printout() -> None:
    payload = {"query": {"results": {"A": {"printouts": {"Item ID": [9]}}}}}
    assert ask_response.parse_item_ids(json.dumps(payload), printout="Item ID") == [9]


@pytest.mark.parametrize(
    "text",
    [
        '{"query": {"results": {',
        "not json at all",
        "[]",
        '{"batchcomplete": ""}',
        '{"query": {}}',
        '{"query": {"results": "nope"}}',
        '{"query": {"results": {"A": {}}}}',
        '{"query": {"results": {"A": {"printouts": {}}}}}',
        '{"query": {"results": {"A": {"printouts": {"All Item ID": ["5"]}}}}}',
        '{"query": {"results": {"A": {"printouts": {"All Item ID": [true]}}}}}',
        '{"query": {"results": {"A": {"printouts": {"All Item ID": [-1]}}}}}',
    ],
)
def test_parse_item_ids_rejects_malformed_payloads(text: str) -> None:
    with pytest.raises(MalformedResponse):
        ask_response.parse_item_ids(text)

