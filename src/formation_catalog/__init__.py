"""Catalog, search and offline cache for markdown course articles."""

from formation_catalog.core.catalog.builder import CatalogBuilder
from formation_catalog.core.offline.cache import OfflineCache
from formation_catalog.fetcher import FileDocumentFetcher, HttpDocumentFetcher
from formation_catalog.protocols import (
    BlobStoreProtocol,
    FetcherProtocol,
    IdentifierSourceProtocol,
)

__all__ = [
    "BlobStoreProtocol",
    "CatalogBuilder",
    "FetcherProtocol",
    "FileDocumentFetcher",
    "HttpDocumentFetcher",
    "IdentifierSourceProtocol",
    "OfflineCache",
]
