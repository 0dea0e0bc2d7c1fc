"""Assemble a section's documents into an ordered, leveled tree."""

import asyncio
from collections.abc import Iterable, Mapping
from pathlib import PurePosixPath

from loguru import logger

from formation_catalog.config import DEFAULT_SECTION, FALLBACK_CATEGORY
from formation_catalog.core.catalog.front_matter import parse_front_matter
from formation_catalog.core.catalog.sort_key import (
    category_for_sort_key,
    extract_sort_key,
    sort_key_to_number,
)
from formation_catalog.core.tree.navigation import find_by_slug, flatten, group_by_category
from formation_catalog.models.entry import CatalogEntry
from formation_catalog.protocols import FetcherProtocol, IdentifierSourceProtocol


def slugify(identifier: str) -> str:
    """Strip the directory prefix and the .md extension of an identifier."""
    return PurePosixPath(identifier).name.removesuffix(".md")


def qualify(identifier: str, section: str) -> str:
    """Prefix a bare file name with its section path."""
    return identifier if "/" in identifier else f"{section}/{identifier}"


def build_entry(identifier: str, section: str, content: str) -> CatalogEntry:
    """Build a childless catalog entry from a document's identifier and text."""
    metadata, _body = parse_front_matter(content)
    slug = slugify(identifier)
    sort_key = extract_sort_key(identifier)
    parent = metadata.parent if metadata else None
    return CatalogEntry(
        slug=slug,
        title=(metadata.title if metadata else "") or slug,
        source_path=qualify(identifier, section),
        category=category_for_sort_key(sort_key, section),
        sort_order=sort_key_to_number(sort_key),
        sort_key=sort_key,
        parent=parent,
        parent_slug=slugify(parent) if parent else None,
        tags=metadata.tags if metadata else (),
    )


def degraded_entry(identifier: str, section: str) -> CatalogEntry:
    """Entry used when a document could not be loaded or parsed."""
    slug = slugify(identifier)
    sort_key = extract_sort_key(identifier)
    return CatalogEntry(
        slug=slug,
        title=slug,
        source_path=qualify(identifier, section),
        category=FALLBACK_CATEGORY,
        sort_order=sort_key_to_number(sort_key),
        sort_key=sort_key,
    )


def _sort_siblings(siblings: list[CatalogEntry], level: int) -> None:
    # list.sort is stable: load order breaks sort_order ties.
    siblings.sort(key=lambda e: e.sort_order)
    for entry in siblings:
        entry.level = level
        _sort_siblings(entry.children, level + 1)


def assemble_tree(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Wire childless entries into a tree and return the sorted roots.

    Entries whose parent slug does not resolve, or names the entry itself,
    become roots. Longer circular parent references are not detected: entries
    in such a cycle are attached to each other and are unreachable from the
    returned roots.
    """
    entries = list(entries)
    by_slug = {e.slug: e for e in entries}

    roots: list[CatalogEntry] = []
    for entry in entries:
        parent = by_slug.get(entry.parent_slug) if entry.parent_slug else None
        if parent is not None and parent is not entry:
            parent.children.append(entry)
            entry.level = parent.level + 1
        else:
            entry.level = 0
            roots.append(entry)

    _sort_siblings(roots, level=0)
    return roots


class CatalogBuilder:
    """Build and cache the catalog tree of the current section.

    Only one tree is cached: switching section or calling ``reset()`` drops it.
    """

    def __init__(
        self,
        fetcher: FetcherProtocol,
        sources: Mapping[str, IdentifierSourceProtocol],
        *,
        section: str = DEFAULT_SECTION,
    ) -> None:
        self._fetcher = fetcher
        self._sources = dict(sources)
        self._section = section
        self._cache: tuple[str, list[CatalogEntry]] | None = None

    @property
    def section(self) -> str:
        return self._section

    @property
    def cached_tree(self) -> list[CatalogEntry] | None:
        if self._cache is None or self._cache[0] != self._section:
            return None
        return self._cache[1]

    def set_section(self, section: str) -> None:
        """Select a section, invalidating the cached tree if it changes."""
        if section != self._section:
            logger.debug("Switching section {} -> {}", self._section, section)
            self._section = section
            self._cache = None

    def reset(self) -> None:
        self._cache = None

    def list_identifiers(self, section: str) -> list[str]:
        """Return the identifiers of a section; unknown sections have none."""
        source = self._sources.get(section)
        if source is None:
            logger.warning("Unknown section {!r}", section)
            return []
        return source.list_identifiers()

    async def build_catalog(self, section: str | None = None) -> list[CatalogEntry]:
        """Return the section's tree, building it if it is not cached.

        Every document is fetched and parsed concurrently. A document that fails
        to load is replaced by a degraded entry; the build itself never fails.
        """
        if section is not None:
            self.set_section(section)
        cached = self.cached_tree
        if cached is not None:
            return cached

        section = self._section
        identifiers = await asyncio.to_thread(self.list_identifiers, section)
        loaded = await asyncio.gather(*(self._load_entry(i, section) for i in identifiers))
        tree = assemble_tree(entry for entry, _ok in loaded)

        degraded = sum(1 for _entry, ok in loaded if not ok)
        logger.info(
            "Catalog built for {}: {} entries, {} roots, {} degraded",
            section, len(loaded), len(tree), degraded,
        )
        self._cache = (section, tree)
        return tree

    async def _load_entry(self, identifier: str, section: str) -> tuple[CatalogEntry, bool]:
        try:
            content = await asyncio.to_thread(self._fetcher.fetch, qualify(identifier, section))
            return build_entry(identifier, section, content), True
        except Exception:
            logger.exception("Failed to load {}, using a degraded entry", identifier)
            return degraded_entry(identifier, section), False

    async def get_flat(self, section: str | None = None) -> list[CatalogEntry]:
        return flatten(await self.build_catalog(section))

    async def get_by_category(self, section: str | None = None) -> dict[str, list[CatalogEntry]]:
        return group_by_category(await self.build_catalog(section))

    async def get_by_slug(self, slug: str, section: str | None = None) -> CatalogEntry | None:
        return find_by_slug(await self.build_catalog(section), slug)
