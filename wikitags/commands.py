# wiki_bank_tags/wikitags/commands.py
"""Chat command trigger and user notification for category tagging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from .category_tags import CategoryTagger, Outcome, OutcomeStatus
from .errors import WikiTagError


class Notifier(Protocol):
    def post(self, message: str) -> None: ...


class LogNotifier:
    def post(self, message: str) -> None:
        logging.info("%s", message)


class PrintNotifier:
    def post(self, message: str) -> None:
        print(message)


@dataclass
class CommandExecuted:
    """A chat command such as ``::wikibt Runite equipment``."""

    command: str
    arguments: Sequence[str] = field(default_factory=tuple)


def handle_command(
    event: CommandExecuted,
    tagger: CategoryTagger,
    *,
    chat_command: str,
    notifier: Notifier,
) -> Optional[Outcome]:
    """Run the tagger when ``event`` is ``chat_command`` with exactly one argument.

    Any other event is ignored and ``None`` is returned. Store failures that
    escape the tagger are logged and reported to the user as text.
    """
    if event.command != chat_command or len(event.arguments) != 1:
        return None

    category = event.arguments[0]
    try:
        outcome = tagger.resolve_and_tag(category)
    except WikiTagError as exc:
        logging.error("Tagging category %r failed: %s", category, exc)
        outcome = Outcome(category=category, status=OutcomeStatus.NO_ITEMS_FOUND, store_error=str(exc))

    for message in outcome.messages:
        notifier.post(message)
    return outcome


__all__ = ["CommandExecuted", "LogNotifier", "Notifier", "PrintNotifier", "handle_command"]
