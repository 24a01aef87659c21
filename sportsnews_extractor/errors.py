"""Exceptions raised inside the extraction pipeline.

None of these reach callers of ``ArticleExtractor.extract``: the
orchestrator turns them into an error-flagged ``ExtractionResult``.
"""

from __future__ import annotations


class ExtractorError(Exception):
    """Base class for extraction failures."""


class FetchError(ExtractorError):
    """Network failure, timeout, non-2xx status or non-text response."""

    def __init__(self, message: str, *, url: str = "", status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(ExtractorError):
    """The HTML could not be turned into a document tree."""


class CacheError(ExtractorError):
    """The key-value store could not be reached or returned garbage."""
