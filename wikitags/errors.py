# wiki_bank_tags/wikitags/errors.py
"""Error types raised along the category tagging pipeline."""

from __future__ import annotations


class WikiTagError(Exception):
    """Base class for pipeline failures."""


class NetworkError(WikiTagError):
    """The wiki query could not be fetched."""


class MalformedResponse(WikiTagError, ValueError):
    """The wiki answered with something other than an ask result."""


class PersistError(WikiTagError):
    """A configuration write did not complete."""


__all__ = ["WikiTagError", "NetworkError", "MalformedResponse", "PersistError"]
