# wiki_bank_tags/wikitags/run_step.py
"""Command-line front-end for tagging the items of a wiki category.

Reads a YAML configuration (see ``configs/default.yaml``), resolves the
``category_tags`` step into :class:`~wikitags.category_tags.CategoryTagConfig`
and runs the chat command for one category. Typical invocation:

``wiki-bank-tags --config configs/default.yaml "Runite equipment"``.

Use ``--dry-run`` to inspect the resolved configuration and query URL without
touching the network, and ``--json`` for machine-readable output.

Exit status is 0 when items were tagged, 1 when none were found and 2 when
the bank tag store could not be read or written.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml

from .category_tags import CategoryTagConfig, OutcomeStatus, build_tagger
from .commands import CommandExecuted, LogNotifier, PrintNotifier, handle_command

STEP_KEY = "category_tags"


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``wiki-bank-tags`` command."""
    default_config_path = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"

    parser = argparse.ArgumentParser(description="Tag bank items from an OSRS wiki category.")
    parser.add_argument(
        "--config",
        type=Path,
        default=default_config_path,
        help="Path to YAML configuration file.",
    )
    parser.add_argument("category", help="Wiki category name, without the 'Category:' prefix.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve configuration and print the query URL without fetching.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit results (or dry-run config) as JSON for downstream tooling.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for pipeline progress.",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(message)s")

    config_path = args.config.expanduser().resolve()
    config_data = _load_config(config_path)
    step_cfg = (config_data.get("steps") or {}).get(STEP_KEY)
    if step_cfg is None:
        raise KeyError(f"Step '{STEP_KEY}' not found in configuration {config_path}")

    step_config = _parse_category_tag_config(step_cfg, config_path.parent)
    tagger = build_tagger(step_config)

    if args.dry_run:
        payload = {
            "step": STEP_KEY,
            "config": _to_serialisable(step_config),
            "query_url": tagger.query_url(args.category),
        }
        if args.json:
            print(json.dumps(payload, indent=2))
        else:
            print(f"[DRY-RUN] {STEP_KEY} configuration:\n{yaml.safe_dump(payload, sort_keys=False)}")
        return 0

    notifier = LogNotifier() if args.json else PrintNotifier()
    event = CommandExecuted(command=step_config.chat_command, arguments=(args.category,))
    outcome = handle_command(
        event,
        tagger,
        chat_command=step_config.chat_command,
        notifier=notifier,
    )
    if outcome is None:
        raise RuntimeError(f"Command {step_config.chat_command!r} was not handled.")

    if args.json:
        payload = {
            "step": STEP_KEY,
            "summary": outcome.message,
            "messages": outcome.messages,
            "result": _to_serialisable(outcome),
        }
        print(json.dumps(payload, indent=2))
    if outcome.failed:
        return 2
    return 0 if outcome.status is OutcomeStatus.TAGGED else 1


def _load_config(path: Path) -> Mapping[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _resolve_path(base_dir: Path, value: str) -> Path:
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = (base_dir / candidate).resolve()
    return candidate


def _parse_category_tag_config(config: Mapping[str, Any], base_dir: Path) -> CategoryTagConfig:
    defaults = CategoryTagConfig(store_path=Path("bank_tags.yaml"))
    return CategoryTagConfig(
        store_path=_resolve_path(base_dir, config.get("store_path", "bank_tags.yaml")),
        api_url=config.get("api_url", defaults.api_url),
        limit=int(config.get("limit", defaults.limit)),
        printout=config.get("printout", defaults.printout),
        chat_command=config.get("chat_command", defaults.chat_command),
        user_agent=config.get("user_agent", defaults.user_agent),
        timeout=float(config["timeout"]) if config.get("timeout") is not None else None,
        create_tab=bool(config.get("create_tab", True)),
    )


def _to_serialisable(obj: Any) -> Any:
    if is_dataclass(obj):
        data = asdict(obj)
        return {key: _to_serialisable(value) for key, value in data.items()}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, dict):
        return {key: _to_serialisable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_to_serialisable(value) for value in obj]
    return obj


if __name__ == "__main__":
    sys.exit(main())
