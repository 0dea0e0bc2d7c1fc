"""Tests for catalog statistics."""

from formation_catalog.config import SECTIONS
from formation_catalog.core.offline.cache import OfflineCache
from formation_catalog.core.stats import collect_stats
from formation_catalog.models.entry import CatalogEntry
from tests.unit.fakes import FakeBlobStore, FakeClock, make_entry


def test_collect_stats(catalog: list[CatalogEntry]) -> None:
    cache = OfflineCache(FakeBlobStore(), clock=FakeClock())
    cache.put(make_entry("01-introduction"), "# Intro")

    stats = collect_stats(catalog, SECTIONS, cache)

    assert stats.total_entries == 11
    assert stats.total_sections == 7
    assert stats.cached_entries == 1
    assert stats.cache_size_mb > 0
    assert stats.entries_by_category == {
        "Bases Python": 4,
        "Intelligence Artificielle": 5,
        "Projets Pratiques": 1,
        "Other": 1,
    }


def test_collect_stats_empty() -> None:
    cache = OfflineCache(FakeBlobStore())
    stats = collect_stats([], [], cache)
    assert stats.total_entries == 0
    assert stats.cache_size_mb == 0
    assert stats.entries_by_category == {}
