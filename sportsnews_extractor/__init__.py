"""sportsnews-extractor: normalized article records from sports-news sites."""

from .cache import ArticleCache, JsonFileStore, MemoryStore, RedisStore, build_store
from .config import Settings, get_settings
from .errors import CacheError, ExtractorError, FetchError, ParseError
from .extractor import ArticleExtractor
from .fetch import PageFetcher
from .models import ArticleResult, EmbedRef, ExtractionResult
from .sites import SITES, get_site, site_for_url
from .strategy import ExtractionStrategy, SiteConfig

__all__ = [
    "Settings",
    "get_settings",
    "ArticleCache",
    "MemoryStore",
    "JsonFileStore",
    "RedisStore",
    "build_store",
    "ArticleExtractor",
    "PageFetcher",
    "ExtractionStrategy",
    "SiteConfig",
    "SITES",
    "get_site",
    "site_for_url",
    "ArticleResult",
    "EmbedRef",
    "ExtractionResult",
    "ExtractorError",
    "FetchError",
    "ParseError",
    "CacheError",
]
