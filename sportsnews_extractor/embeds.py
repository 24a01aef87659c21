"""Detection of media embed carriers and validation of their URLs."""

from __future__ import annotations

import html
import logging
import re
from typing import Dict, Iterable, List, Optional, Pattern, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag

from .models import EmbedRef, SocialEmbed

logger = logging.getLogger(__name__)

SOCIAL_PATTERNS: Dict[str, Pattern[str]] = {
    "twitter": re.compile(r"/status(?:es)?/\d+"),
    "instagram": re.compile(r"instagram\.com/(?:[\w.]+/)?(?:p|reel|tv)/[\w-]+", re.I),
}

VIDEO_PATTERNS: Dict[str, Pattern[str]] = {
    "youtube": re.compile(
        r"(?:youtube(?:-nocookie)?\.com/(?:embed|shorts)/|youtu\.be/)[\w-]+", re.I
    ),
    "vimeo": re.compile(r"player\.vimeo\.com/video/\d+", re.I),
}

TRACKING_PARAMS = frozenset({
    "ref_src", "ref_url", "igshid", "igsh", "si", "feature", "fbclid",
})

# Share-sheet params on tweet links; `t` is a start time on video hosts.
TWITTER_TRACKING_PARAMS = frozenset({"s", "t"})
TWITTER_HOSTS = ("twitter.com", "x.com")


def _is_twitter_host(host: str) -> bool:
    host = host.lower().split(":")[0]
    return any(host == h or host.endswith("." + h) for h in TWITTER_HOSTS)


def is_valid_url(url: str) -> bool:
    """Return True for an absolute http(s) URL with a host."""
    if not url:
        return False
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def strip_tracking(url: str) -> str:
    """Drop tracking query parameters and the fragment from ``url``."""
    parts = urlsplit(url.strip())
    dropped = TRACKING_PARAMS
    if _is_twitter_host(parts.netloc):
        dropped = dropped | TWITTER_TRACKING_PARAMS
    query = [
        (k, v)
        for k, v in parse_qsl(parts.query, keep_blank_values=True)
        if k.lower() not in dropped and not k.lower().startswith("utm_")
    ]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), ""))


def clean_embed_url(url: str) -> Optional[str]:
    """Return the cleaned URL, or None when it is not an absolute http(s) URL."""
    if not is_valid_url(url):
        return None
    try:
        cleaned = strip_tracking(url)
    except ValueError:
        return None
    return cleaned if is_valid_url(cleaned) else None


def match_provider(url: str, patterns: Dict[str, Pattern[str]]) -> Optional[str]:
    for provider, pattern in patterns.items():
        if pattern.search(url):
            return provider
    return None


def _last_match(
    candidates: Iterable[str], patterns: Dict[str, Pattern[str]]
) -> Optional[Tuple[str, str]]:
    found: Optional[Tuple[str, str]] = None
    for candidate in candidates:
        provider = match_provider(candidate, patterns)
        if provider:
            found = (provider, candidate)
    return found


def social_link_embed(carrier: Tag) -> Optional[EmbedRef]:
    """Embed for a blockquote/figure that links to a social post.

    The last matching link wins. Carriers whose link does not survive
    cleaning are skipped.
    """
    hrefs = [a.get("href", "") for a in carrier.find_all("a")]
    match = _last_match(hrefs, SOCIAL_PATTERNS)
    if match is None:
        return None
    provider, href = match
    url = clean_embed_url(href)
    if url is None:
        logger.debug("Dropping %s embed with invalid link: %r", provider, href)
        return None
    return EmbedRef(url=url, provider=provider)


def _iframes_in(carrier: Tag) -> List[Tag]:
    frames = carrier.find_all("iframe")
    if frames:
        return frames
    # Some parsers keep <noscript> content as raw text.
    raw = carrier.get_text()
    if "<iframe" not in raw:
        return []
    return BeautifulSoup(raw, "lxml").find_all("iframe")


def render_iframe(url: str) -> str:
    return (
        f'<iframe src="{html.escape(url, quote=True)}" frameborder="0" '
        'allowfullscreen></iframe>'
    )


def video_iframe_embed(carrier: Tag) -> Optional[EmbedRef]:
    """Embed for a script-disabled fallback holding a video player iframe."""
    sources = [frame.get("src", "") for frame in _iframes_in(carrier)]
    match = _last_match(sources, VIDEO_PATTERNS)
    if match is None:
        return None
    provider, src = match
    url = clean_embed_url(src)
    if url is None:
        logger.debug("Dropping %s embed with invalid source: %r", provider, src)
        return None
    return EmbedRef(url=url, provider=provider, html=render_iframe(url))


CARRIER_EXTRACTORS = {
    "social_link": social_link_embed,
    "video_iframe": video_iframe_embed,
}


def collect_social_embeds(container: Tag, selector: str) -> List[SocialEmbed]:
    """Record social posts matched by ``selector`` before they are stripped."""
    found: List[SocialEmbed] = []
    for quote in container.select(selector):
        para = quote.find("p")
        text = para.get_text(" ", strip=True) if para else ""
        if not text:
            continue
        links = quote.find_all("a")
        href = links[-1].get("href", "") if links else ""
        found.append(SocialEmbed(text=text, url=clean_embed_url(href) or ""))
    return found


def remove_carriers(container: Tag, selectors: Iterable[str]) -> int:
    """Delete excluded carriers from ``container``; returns how many went."""
    removed = 0
    for selector in selectors:
        for el in container.select(selector):
            if el.decomposed:
                continue
            el.decompose()
            removed += 1
    return removed
