"""HTTP page fetching for article extraction.

One request per call, bounded by the configured timeout. Failures are
not retried: every httpx error surfaces as ``FetchError``.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from .config import Settings, get_settings
from .embeds import is_valid_url
from .errors import FetchError

logger = logging.getLogger(__name__)

TEXT_CONTENT_TYPES = ("text/", "application/xhtml+xml", "application/xml")


def _default_headers(settings: Settings) -> Dict[str, str]:
    return {
        "user-agent": settings.user_agent,
        "cache-control": "no-cache",
        "accept": "text/html",
        "accept-language": settings.accept_language,
    }


def _is_text_response(resp: httpx.Response) -> bool:
    ctype = resp.headers.get("content-type", "").lower()
    if not ctype:
        return True
    return ctype.startswith(TEXT_CONTENT_TYPES)


class PageFetcher:
    """Fetches raw HTML with an ``httpx.AsyncClient``.

    Args:
        settings: Extractor settings. Uses defaults if not provided.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.timeout_total,
            follow_redirects=True,
            headers=_default_headers(self.settings),
            transport=self.transport,
        )

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` and return the body as text.

        Raises:
            FetchError: On invalid URLs, timeouts, transport errors,
                non-2xx responses and non-text content types.
        """
        if not is_valid_url(url):
            raise FetchError(f"Invalid URL: {url!r}", url=url)

        logger.info("Fetching: %s", url)
        try:
            async with self._client() as client:
                resp = await client.get(url)
                resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise FetchError(f"Timed out fetching {url}", url=url) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(f"HTTP {status} for {url}", url=url, status=status) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Request failed for {url}: {exc}", url=url) from exc

        if not _is_text_response(resp):
            raise FetchError(
                f"Non-text response ({resp.headers.get('content-type')}) for {url}",
                url=url,
                status=resp.status_code,
            )

        logger.info("Fetched OK: %s (%d bytes)", url, len(resp.content))
        return resp.text
