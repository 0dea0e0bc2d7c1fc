"""Dashboard statistics over the catalog and the offline cache."""

from dataclasses import dataclass

from formation_catalog.core.offline.cache import OfflineCache
from formation_catalog.core.tree.navigation import flatten
from formation_catalog.models.entry import CatalogEntry, Section


@dataclass(frozen=True)
class CatalogStats:
    """Summary shown on the dashboard."""

    total_entries: int
    total_sections: int
    cached_entries: int
    cache_size_mb: float
    entries_by_category: dict[str, int]


def collect_stats(
    tree: list[CatalogEntry],
    sections: list[Section],
    cache: OfflineCache,
) -> CatalogStats:
    entries = flatten(tree)
    by_category: dict[str, int] = {}
    for entry in entries:
        by_category[entry.category] = by_category.get(entry.category, 0) + 1
    return CatalogStats(
        total_entries=len(entries),
        total_sections=len(sections),
        cached_entries=len(cache.cached_entries()),
        cache_size_mb=cache.size_estimate_mb(),
        entries_by_category=by_category,
    )
