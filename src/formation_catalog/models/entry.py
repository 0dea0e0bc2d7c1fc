"""Domain models for the formation catalog."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class DocumentMetadata:
    """Typed view of a document's front-matter block."""

    title: str = ""
    order: int | float = 0
    parent: str | None = None
    tags: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass
class CatalogEntry:
    """A single document's position in a section's hierarchy.

    Only ``children`` and ``level`` change after construction, and only while
    the catalog builder assembles the tree.
    """

    slug: str
    title: str
    source_path: str
    category: str
    sort_order: int
    sort_key: str
    parent: str | None = None
    parent_slug: str | None = None
    tags: tuple[str, ...] = ()
    level: int = 0
    children: list["CatalogEntry"] = field(default_factory=list, repr=False)

    @property
    def section(self) -> str:
        """Top-level path segment of the source path."""
        return self.source_path.split("/")[0]


@dataclass(frozen=True)
class EntrySummary:
    """Children-free projection of a catalog entry, safe to serialize."""

    slug: str
    title: str
    source_path: str
    category: str
    sort_key: str
    tags: tuple[str, ...] = ()
    level: int = 0

    @classmethod
    def from_entry(cls, entry: CatalogEntry) -> "EntrySummary":
        return cls(
            slug=entry.slug,
            title=entry.title,
            source_path=entry.source_path,
            category=entry.category,
            sort_key=entry.sort_key,
            tags=tuple(entry.tags),
            level=entry.level,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EntrySummary":
        return cls(
            slug=data["slug"],
            title=data.get("title", data["slug"]),
            source_path=data.get("source_path", ""),
            category=data.get("category", ""),
            sort_key=data.get("sort_key", "999"),
            tags=tuple(data.get("tags", ())),
            level=data.get("level", 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "source_path": self.source_path,
            "category": self.category,
            "sort_key": self.sort_key,
            "tags": list(self.tags),
            "level": self.level,
        }


@dataclass(frozen=True)
class CachedDocument:
    """A document body held by the offline cache."""

    entry: EntrySummary
    content: str
    cached_at: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CachedDocument":
        return cls(
            entry=EntrySummary.from_dict(data["entry"]),
            content=data["content"],
            cached_at=int(data["cached_at"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry": self.entry.to_dict(),
            "content": self.content,
            "cached_at": self.cached_at,
        }


class Difficulty(str, Enum):
    """Difficulty levels understood by the search filters."""

    BEGINNER = "débutant"
    INTERMEDIATE = "intermédiaire"
    ADVANCED = "avancé"


@dataclass(frozen=True)
class SearchFilters:
    """Optional criteria for a catalog search.

    ``date_from`` and ``date_to`` are accepted but not used for scoring yet.
    """

    query: str | None = None
    tags: tuple[str, ...] | None = None
    category: str | None = None
    section: str | None = None
    difficulty: Difficulty | None = None
    min_reading_minutes: int | None = None
    max_reading_minutes: int | None = None
    date_from: date | None = None
    date_to: date | None = None


@dataclass(frozen=True)
class SearchResult:
    """A search hit with its relevance and the fields that matched."""

    entry: CatalogEntry
    relevance: int = 0
    matched_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class Suggestion:
    """A related entry with the reasons it was suggested."""

    entry: CatalogEntry
    reasons: tuple[str, ...]
    score: int

    @property
    def reason(self) -> str:
        return ", ".join(self.reasons)


@dataclass(frozen=True)
class Section:
    """A top-level collection of documents."""

    id: str
    name: str
    description: str
    path: str
    icon: str | None = None
    color: str | None = None
