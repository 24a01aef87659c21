"""Per-site extraction orchestrator: cache, fetch, parse, cache again."""

from __future__ import annotations

import logging
from typing import Optional

from .cache import ArticleCache, KeyValueStore, build_store
from .config import Settings, get_settings
from .errors import CacheError, ExtractorError
from .fetch import PageFetcher
from .models import ExtractionResult
from .strategy import ExtractionStrategy, SiteConfig

logger = logging.getLogger(__name__)


class ArticleExtractor:
    """Extracts articles for one site.

    Every outcome, including failures, is cached under the site's
    namespace. Concurrent calls for the same uncached URL are not
    coalesced: each fetches and each writes.
    """

    def __init__(
        self,
        strategy: ExtractionStrategy,
        cache: ArticleCache,
        fetcher: PageFetcher,
    ) -> None:
        self.strategy = strategy
        self.cache = cache
        self.fetcher = fetcher

    @classmethod
    def for_site(
        cls,
        config: SiteConfig,
        *,
        settings: Optional[Settings] = None,
        store: Optional[KeyValueStore] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> "ArticleExtractor":
        s = settings or get_settings()
        return cls(
            ExtractionStrategy(config, summary_min=s.summary_min, summary_max=s.summary_max),
            ArticleCache.from_settings(
                store if store is not None else build_store(s), config.namespace, s
            ),
            fetcher if fetcher is not None else PageFetcher(s),
        )

    @property
    def name(self) -> str:
        return self.strategy.name

    async def extract(self, url: str) -> ExtractionResult:
        """Return the article for ``url``; never raises."""
        cached = await self._load(url)
        if cached is not None:
            logger.debug("%s: use article data from cache: %s", self.name, url)
            return cached

        logger.debug("%s: extract article data: %s", self.name, url)
        try:
            html = await self.fetcher.fetch(url)
            article = self.strategy.parse(html)
        except ExtractorError as exc:
            logger.error("%s: extracting failed: %s (%s)", self.name, url, exc)
            result = ExtractionResult.failure(str(exc))
        except Exception as exc:
            logger.exception("%s: unexpected failure extracting %s", self.name, url)
            result = ExtractionResult.failure(str(exc))
        else:
            result = ExtractionResult(
                error=0, message=f"{self.name} article extracted", data=article
            )
            logger.info("%s: finished extracting article data from %s", self.name, url)

        await self._save(url, result)
        return result

    async def forget(self, url: str) -> bool:
        """Drop the cached result for ``url``."""
        return await self.cache.delete(url)

    async def _load(self, url: str) -> Optional[ExtractionResult]:
        try:
            return await self.cache.load(url)
        except CacheError as exc:
            logger.warning("%s: cache read failed, treating as miss: %s", self.name, exc)
            return None

    async def _save(self, url: str, result: ExtractionResult) -> None:
        try:
            await self.cache.save(url, result)
        except CacheError as exc:
            logger.warning("%s: cache write failed for %s: %s", self.name, url, exc)
