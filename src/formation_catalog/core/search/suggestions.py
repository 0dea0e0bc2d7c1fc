"""Related-document suggestions."""

from formation_catalog.core.tree.navigation import flatten
from formation_catalog.models.entry import CatalogEntry, Suggestion

SHARED_TAG_SCORE = 10
SAME_CATEGORY_SCORE = 15
SAME_SECTION_SCORE = 10


def _score_pair(target: CatalogEntry, candidate: CatalogEntry) -> Suggestion:
    score = 0
    reasons: list[str] = []

    shared = [tag for tag in target.tags if tag in candidate.tags]
    if shared:
        score += SHARED_TAG_SCORE * len(shared)
        reasons.append(f"{len(shared)} shared tag(s)")

    if candidate.category == target.category:
        score += SAME_CATEGORY_SCORE
        reasons.append("same category")

    if candidate.section == target.section:
        score += SAME_SECTION_SCORE
        reasons.append("same section")

    return Suggestion(entry=candidate, reasons=tuple(reasons), score=score)


def similar_to(tree: list[CatalogEntry], target_slug: str, limit: int = 5) -> list[Suggestion]:
    """Rank entries by shared tags, category and section with the target.

    Returns an empty list when the target slug is unknown.
    """
    entries = flatten(tree)
    target = next((e for e in entries if e.slug == target_slug), None)
    if target is None:
        return []

    suggestions = [_score_pair(target, e) for e in entries if e.slug != target_slug]
    suggestions = [s for s in suggestions if s.score > 0]
    suggestions.sort(key=lambda s: s.score, reverse=True)
    return suggestions[:limit]


def recommended(tree: list[CatalogEntry], current_slug: str, limit: int = 5) -> list[Suggestion]:
    """'You might also like' list; currently the similarity ranking."""
    return similar_to(tree, current_slug, limit)


def popular(tree: list[CatalogEntry], limit: int = 10) -> list[CatalogEntry]:
    """First root entries in catalog order.

    Placeholder until consultation statistics exist to rank by real usage.
    """
    return [e for e in flatten(tree) if e.level == 0][:limit]


def trending(tree: list[CatalogEntry], limit: int = 10) -> list[CatalogEntry]:
    """Same policy as popular() until recent-usage data is collected."""
    return popular(tree, limit)
