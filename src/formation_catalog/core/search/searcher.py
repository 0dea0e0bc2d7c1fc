"""Filter and rank catalog entries."""

import math

from formation_catalog.core.tree.navigation import iter_preorder
from formation_catalog.models.entry import CatalogEntry, Difficulty, SearchFilters, SearchResult

TITLE_SCORE = 20
SLUG_SCORE = 10
TAGS_SCORE = 15
CATEGORY_SCORE = 10
DIFFICULTY_SCORE = 5

# Category keywords that stand in for a real difficulty rating.
_DIFFICULTY_KEYWORDS: dict[Difficulty, tuple[str, ...]] = {
    Difficulty.BEGINNER: ("bases",),
    Difficulty.INTERMEDIATE: ("intermédiaire",),
    Difficulty.ADVANCED: ("avancé", "projets"),
}

_WORDS_PER_TITLE_WORD = 50
_WORDS_PER_MINUTE = 200


def estimate_reading_minutes(entry: CatalogEntry) -> int:
    """Crude reading-time estimate derived from the title length only."""
    words = len(entry.title.split(" ")) * _WORDS_PER_TITLE_WORD
    return math.ceil(words / _WORDS_PER_MINUTE)


def matches_difficulty(category: str, difficulty: Difficulty) -> bool:
    category_lower = category.lower()
    return any(k in category_lower for k in _DIFFICULTY_KEYWORDS[difficulty])


def _score_entry(entry: CatalogEntry, filters: SearchFilters) -> SearchResult | None:
    """Score one entry, or return None if a hard filter excludes it."""
    if filters.section and filters.section not in entry.source_path:
        return None

    relevance = 0
    matched: list[str] = []

    if filters.query:
        query = filters.query.lower()
        if query in entry.title.lower():
            relevance += TITLE_SCORE
            matched.append("title")
        if query in entry.slug.lower():
            relevance += SLUG_SCORE
            matched.append("slug")

    if filters.tags:
        wanted = [t.lower() for t in filters.tags]
        if not any(w in tag.lower() for w in wanted for tag in entry.tags):
            return None
        relevance += TAGS_SCORE
        matched.append("tags")

    if filters.category:
        if entry.category != filters.category:
            return None
        relevance += CATEGORY_SCORE
        matched.append("category")

    if filters.difficulty:
        if not matches_difficulty(entry.category, filters.difficulty):
            return None
        relevance += DIFFICULTY_SCORE
        matched.append("difficulty")

    if filters.min_reading_minutes is not None or filters.max_reading_minutes is not None:
        minutes = estimate_reading_minutes(entry)
        if filters.min_reading_minutes is not None and minutes < filters.min_reading_minutes:
            return None
        if filters.max_reading_minutes is not None and minutes > filters.max_reading_minutes:
            return None
        matched.append("readingTime")

    return SearchResult(entry=entry, relevance=relevance, matched_fields=tuple(matched))


def search_entries(tree: list[CatalogEntry], filters: SearchFilters) -> list[SearchResult]:
    """Search the catalog.

    Entries are visited in pre-order. Without any of query, tags, category or
    difficulty every entry passing the hard filters is returned with relevance
    0; otherwise only entries with a positive relevance are kept.

    Returns:
        Results sorted by descending relevance, ties in catalog order.
    """
    scored = bool(filters.query or filters.tags or filters.category or filters.difficulty)

    results: list[SearchResult] = []
    for entry in iter_preorder(tree):
        result = _score_entry(entry, filters)
        if result is None:
            continue
        if result.relevance > 0 or not scored:
            results.append(result)

    results.sort(key=lambda r: r.relevance, reverse=True)
    return results


def list_all_tags(tree: list[CatalogEntry]) -> list[str]:
    return sorted({tag for entry in iter_preorder(tree) for tag in entry.tags})


def list_all_categories(tree: list[CatalogEntry]) -> list[str]:
    return sorted({entry.category for entry in iter_preorder(tree)})
