"""Namespaced, TTL-bound caching of extraction results.

Both successful and failed extractions are stored. Keys are
``"{prefix}-{namespace}-{url}"``; values are the JSON form of an
``ExtractionResult``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from pydantic import ValidationError
from redis import asyncio as aioredis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import Settings
from .errors import CacheError
from .models import ExtractionResult

logger = logging.getLogger(__name__)

FILE_CACHE_NAME = "article_cache.json"


class KeyValueStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str, ttl: int) -> None: ...

    async def delete(self, key: str) -> bool: ...


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

class MemoryStore:
    """In-process store. Entries expire ``ttl`` seconds after being set."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: Dict[str, Tuple[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        self._data[key] = (value, self._clock() + ttl)

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._data)


def _read_json(path: Path) -> Dict[str, Any]:
    """Read a JSON file. Returns empty dict if file doesn't exist."""
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def _write_json_atomic(path: Path, payload: Dict[str, Any]) -> None:
    """Write JSON atomically via tmp-file rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp.replace(path)


def _expiry(entry: Dict[str, Any]) -> float:
    value = entry.get("expires_at")
    return value if isinstance(value, (int, float)) else 0


class JsonFileStore:
    """Single JSON document on disk mapping key -> {value, expires_at}.

    File access runs in a worker thread; writes are serialised per store.
    """

    def __init__(self, path: Path, clock: Callable[[], float] = time.time) -> None:
        self.path = path
        self._clock = clock
        self._lock = asyncio.Lock()

    def _load(self) -> Dict[str, Any]:
        try:
            payload = _read_json(self.path)
        except (OSError, ValueError) as exc:
            raise CacheError(f"Unreadable cache file {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise CacheError(f"Unexpected cache file layout in {self.path}")
        return {k: v for k, v in payload.items() if isinstance(v, dict)}

    def _dump(self, payload: Dict[str, Any]) -> None:
        try:
            _write_json_atomic(self.path, payload)
        except OSError as exc:
            raise CacheError(f"Unwritable cache file {self.path}: {exc}") from exc

    def _get(self, key: str) -> Optional[str]:
        entry = self._load().get(key)
        if entry is None or self._clock() >= _expiry(entry):
            return None
        value = entry.get("value")
        return value if isinstance(value, str) else None

    def _set(self, key: str, value: str, ttl: int) -> None:
        now = self._clock()
        payload = {k: v for k, v in self._load().items() if _expiry(v) > now}
        payload[key] = {"value": value, "expires_at": now + ttl}
        self._dump(payload)

    def _delete(self, key: str) -> bool:
        payload = self._load()
        if key not in payload:
            return False
        del payload[key]
        self._dump(payload)
        return True

    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._get, key)

    async def set(self, key: str, value: str, ttl: int) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set, key, value, ttl)

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return await asyncio.to_thread(self._delete, key)


class RedisStore:
    """Redis-backed store; connection errors are retried with backoff."""

    def __init__(self, settings: Settings, *, client: Optional[Any] = None) -> None:
        self.settings = settings
        self.client = client if client is not None else aioredis.Redis.from_url(
            settings.redis_url, db=settings.redis_db, decode_responses=True
        )

    def _retrying(self) -> AsyncRetrying:
        s = self.settings
        return AsyncRetrying(
            stop=stop_after_attempt(s.max_attempts),
            wait=wait_exponential(
                multiplier=s.backoff_multiplier, min=s.backoff_min, max=s.backoff_max
            ),
            retry=retry_if_exception_type((RedisConnectionError, RedisTimeoutError)),
            reraise=True,
        )

    async def _call(self, op: str, *args: Any, **kwargs: Any) -> Any:
        try:
            async for attempt in self._retrying():
                with attempt:
                    return await getattr(self.client, op)(*args, **kwargs)
        except RedisError as exc:
            raise CacheError(f"Redis {op} failed: {exc}") from exc

    async def get(self, key: str) -> Optional[str]:
        value = await self._call("get", key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        await self._call("set", key, value, ex=ttl)

    async def delete(self, key: str) -> bool:
        return bool(await self._call("delete", key))

    async def aclose(self) -> None:
        await self.client.aclose()


def build_store(settings: Settings) -> KeyValueStore:
    """Pick the store named by ``settings.cache_backend``."""
    if settings.cache_backend == "redis":
        logger.debug("Using redis cache at %s (db=%d)", settings.redis_url, settings.redis_db)
        return RedisStore(settings)
    if settings.cache_backend == "file":
        path = settings.cache_dir / FILE_CACHE_NAME
        logger.debug("Using file cache at %s", path)
        return JsonFileStore(path)
    return MemoryStore()


# ---------------------------------------------------------------------------
# Namespaced article cache
# ---------------------------------------------------------------------------

class ArticleCache:
    """Cache of ``ExtractionResult`` per source URL for one extractor.

    Args:
        store: The key-value store to use.
        namespace: Extractor identity, e.g. ``"sicom-article"``.
        ttl: Seconds a successful result stays cached.
        failure_ttl: Seconds a failed result stays cached; ``ttl`` if None.
        prefix: Key prefix shared by every namespace.
    """

    def __init__(
        self,
        store: KeyValueStore,
        namespace: str,
        *,
        ttl: int,
        failure_ttl: Optional[int] = None,
        prefix: str = "sportsnews-extractor",
    ) -> None:
        if not namespace:
            raise ValueError("namespace is required")
        self.store = store
        self.namespace = namespace
        self.ttl = ttl
        self.failure_ttl = ttl if failure_ttl is None else failure_ttl
        self.prefix = prefix

    @classmethod
    def from_settings(
        cls, store: KeyValueStore, namespace: str, settings: Settings
    ) -> "ArticleCache":
        return cls(
            store,
            namespace,
            ttl=settings.article_cache_ttl,
            failure_ttl=settings.failure_cache_ttl,
            prefix=settings.cache_prefix,
        )

    def key(self, url: str) -> str:
        return f"{self.prefix}-{self.namespace}-{url}"

    async def load(self, url: str) -> Optional[ExtractionResult]:
        """Return the cached result for ``url``, or None on a miss.

        Raises:
            CacheError: If the store cannot be read.
        """
        raw = await self.store.get(self.key(url))
        if not raw:
            return None
        try:
            return ExtractionResult.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring malformed cache entry for %s", self.key(url))
            return None

    async def save(
        self, url: str, result: ExtractionResult, ttl: Optional[int] = None
    ) -> int:
        """Store ``result`` and return the TTL that was applied.

        Raises:
            CacheError: If the store cannot be written.
        """
        if ttl is None:
            ttl = self.failure_ttl if result.error else self.ttl
        await self.store.set(self.key(url), result.model_dump_json(), ttl)
        logger.debug("Cached %s (error=%d, ttl=%ds)", self.key(url), result.error, ttl)
        return ttl

    async def delete(self, url: str) -> bool:
        return await self.store.delete(self.key(url))
