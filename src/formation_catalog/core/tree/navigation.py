"""Tree navigation: flattening, grouping, lookup and breadcrumbs."""

from collections.abc import Iterator

from formation_catalog.models.entry import CatalogEntry


def iter_preorder(tree: list[CatalogEntry]) -> Iterator[CatalogEntry]:
    """Yield each entry, then its children recursively, left to right."""
    for entry in tree:
        yield entry
        yield from iter_preorder(entry.children)


def flatten(tree: list[CatalogEntry]) -> list[CatalogEntry]:
    """Return the pre-order list of every entry reachable from the roots."""
    return list(iter_preorder(tree))


def group_by_category(tree: list[CatalogEntry]) -> dict[str, list[CatalogEntry]]:
    """Bucket every entry (all levels) by category, keeping pre-order per bucket."""
    grouped: dict[str, list[CatalogEntry]] = {}
    for entry in iter_preorder(tree):
        grouped.setdefault(entry.category, []).append(entry)
    return grouped


def find_by_slug(tree: list[CatalogEntry], slug: str) -> CatalogEntry | None:
    return next((e for e in iter_preorder(tree) if e.slug == slug), None)


def get_breadcrumbs(tree: list[CatalogEntry], slug: str) -> tuple[CatalogEntry, ...]:
    """Get the ancestors of an entry, from root to immediate parent.

    Returns an empty tuple for roots and for unknown slugs.
    """

    def walk(siblings: list[CatalogEntry], trail: tuple[CatalogEntry, ...]) -> tuple | None:
        for entry in siblings:
            if entry.slug == slug:
                return trail
            found = walk(entry.children, (*trail, entry))
            if found is not None:
                return found
        return None

    return walk(tree, ()) or ()
