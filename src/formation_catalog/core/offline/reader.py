"""Read documents through the offline cache."""

from loguru import logger

from formation_catalog.config import FETCH_FALLBACK_CONTENT
from formation_catalog.core.offline.cache import OfflineCache
from formation_catalog.core.offline.connectivity import ConnectivityMonitor
from formation_catalog.models.entry import CatalogEntry
from formation_catalog.protocols import FetcherProtocol


class DocumentReader:
    """Fetch document bodies, serving and filling the offline cache."""

    def __init__(
        self,
        fetcher: FetcherProtocol,
        cache: OfflineCache,
        monitor: ConnectivityMonitor,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._monitor = monitor

    def read(self, entry: CatalogEntry) -> str:
        """Return the body of ``entry``.

        While offline a cached copy is preferred. Fetched bodies are cached when
        offline or when not cached yet; the fetch fallback text is never cached.
        """
        if not self._monitor.is_online():
            cached = self._cache.get(entry.slug)
            if cached is not None:
                logger.debug("Serving {} from offline cache", entry.slug)
                return cached

        content = self._fetcher.fetch(entry.source_path)
        if content == FETCH_FALLBACK_CONTENT:
            return content

        if not self._monitor.is_online() or not self._cache.has(entry.slug):
            self._cache.put(entry, content)
        return content
