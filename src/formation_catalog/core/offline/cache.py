"""Time- and size-bounded offline cache of document bodies."""

import json
import math
import time
from collections.abc import Callable

from loguru import logger

from formation_catalog.config import CACHE_EVICTION_RATIO, CACHE_KEY, CACHE_TTL_MS
from formation_catalog.core.offline.store import StoreWriteError
from formation_catalog.models.entry import CachedDocument, CatalogEntry, EntrySummary
from formation_catalog.protocols import BlobStoreProtocol


def _now_ms() -> int:
    return int(time.time() * 1000)


class OfflineCache:
    """Document bodies keyed by slug, persisted as one JSON blob.

    Every operation reads the whole map, mutates it, and writes it back, so the
    cache assumes a single writer.
    """

    def __init__(
        self,
        store: BlobStoreProtocol,
        *,
        key: str = CACHE_KEY,
        ttl_ms: int = CACHE_TTL_MS,
        eviction_ratio: float = CACHE_EVICTION_RATIO,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._store = store
        self.key = key
        self.ttl_ms = ttl_ms
        self.eviction_ratio = eviction_ratio
        self._clock = clock

    def _is_expired(self, cached: CachedDocument, now: int) -> bool:
        return now - cached.cached_at > self.ttl_ms

    def has(self, slug: str) -> bool:
        return slug in self._load()

    def get(self, slug: str) -> str | None:
        """Return the cached content, or None if absent or expired.

        An expired document is removed from the store.
        """
        cache = self._load()
        cached = cache.get(slug)
        if cached is None:
            return None

        if self._is_expired(cached, self._clock()):
            logger.debug("Cached {} expired", slug)
            del cache[slug]
            self._save(cache)
            return None
        return cached.content

    def put(self, entry: CatalogEntry | EntrySummary, content: str) -> None:
        """Insert or replace a document, stamped with the current time."""
        summary = entry if isinstance(entry, EntrySummary) else EntrySummary.from_entry(entry)
        cache = self._load()
        cache[summary.slug] = CachedDocument(entry=summary, content=content, cached_at=self._clock())
        self._save(cache)

    def cached_entries(self) -> list[EntrySummary]:
        return [cached.entry for cached in self._load().values()]

    def purge_expired(self) -> int:
        """Remove every expired document; returns how many were removed."""
        cache = self._load()
        now = self._clock()
        expired = [slug for slug, cached in cache.items() if self._is_expired(cached, now)]
        for slug in expired:
            del cache[slug]
        if expired:
            logger.info("Purged {} expired document(s) from cache", len(expired))
            self._save(cache)
        return len(expired)

    def clear(self) -> None:
        self._store.remove(self.key)

    def size_estimate_mb(self) -> float:
        """Approximate size of the cached documents in megabytes."""
        size = sum(
            len(json.dumps(cached.to_dict()).encode("utf-8")) for cached in self._load().values()
        )
        return size / (1024 * 1024)

    def _load(self) -> dict[str, CachedDocument]:
        stored = self._store.get(self.key)
        if not stored:
            return {}
        try:
            data = json.loads(stored)
            return {slug: CachedDocument.from_dict(value) for slug, value in data.items()}
        except (ValueError, KeyError, TypeError, AttributeError):
            logger.exception("Unreadable offline cache, starting empty")
            return {}

    def _write(self, cache: dict[str, CachedDocument]) -> None:
        data = {slug: cached.to_dict() for slug, cached in cache.items()}
        self._store.set(self.key, json.dumps(data))

    def _save(self, cache: dict[str, CachedDocument]) -> None:
        try:
            self._write(cache)
            return
        except StoreWriteError as e:
            logger.warning("Cache write rejected ({}), evicting oldest documents", e)

        self._evict_oldest(cache)
        try:
            self._write(cache)
        except StoreWriteError as e:
            logger.warning("Cache write rejected after eviction, giving up: {}", e)

    def _evict_oldest(self, cache: dict[str, CachedDocument]) -> None:
        oldest = sorted(cache.items(), key=lambda item: item[1].cached_at)
        # Rounding first keeps 15 * 0.2 at 3 rather than 3.0000000000000004.
        count = math.ceil(round(len(oldest) * self.eviction_ratio, 9))
        for slug, _cached in oldest[:count]:
            del cache[slug]
        logger.info("Evicted {} of {} cached document(s)", count, len(oldest))
