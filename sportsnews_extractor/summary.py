"""Bounded-length article summaries."""

from __future__ import annotations

import html
import re

SUMMARY_MIN = 140
SUMMARY_MAX = 250
ELLIPSIS = "..."

TAG_RE = re.compile(r"<[^>]+>")


def strip_tags(raw: str) -> str:
    """Remove markup and decode entities."""
    if not raw:
        return ""
    return html.unescape(TAG_RE.sub("", raw))


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` characters on a word boundary.

    An ellipsis is appended when anything was dropped; it counts towards
    the limit.
    """
    if len(text) <= limit:
        return text
    room = max(0, limit - len(ELLIPSIS))
    cut = text[:room]
    if " " in cut and not text[room:room + 1].isspace():
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip() + ELLIPSIS


def textify(text: str, limit: int = SUMMARY_MAX) -> str:
    """Plain, single-line, bounded rendering of ``text``."""
    flat = strip_tags(text).strip().replace("\r", " ").replace("\n", " ")
    return truncate(flat, limit)


def make_summary(
    description: str,
    text: str,
    *,
    min_len: int = SUMMARY_MIN,
    max_len: int = SUMMARY_MAX,
) -> str:
    """Prefer the declared description when its length is inside the window.

    Args:
        description: The page's declared description (may be empty).
        text: The assembled plain text of the article body.
        min_len: Exclusive lower bound for using the description.
        max_len: Exclusive upper bound for the description, and the
            maximum length of a derived summary.

    Returns:
        The summary string, never longer than ``max_len``.
    """
    description = description or ""
    if min_len < len(description) < max_len:
        return description.strip()
    return textify(text, max_len)
