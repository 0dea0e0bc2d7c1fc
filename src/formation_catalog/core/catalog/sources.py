"""Section registry and per-section document identifier lists."""

import json
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from formation_catalog.config import (
    FILES_INDEX_NAME,
    INDEXED_SECTIONS,
    SECTION_FILES,
    SECTIONS,
)
from formation_catalog.models.entry import Section
from formation_catalog.protocols import FetcherProtocol, IdentifierSourceProtocol


class SectionRegistry:
    """Static, ordered list of sections with lookup by id."""

    def __init__(self, sections: Iterable[Section] = SECTIONS) -> None:
        self._sections = list(sections)

    def all(self) -> list[Section]:
        return list(self._sections)

    def get(self, section_id: str) -> Section | None:
        return next((s for s in self._sections if s.id == section_id), None)

    def path_for(self, section_id: str) -> str:
        """Return the content path of a section, or "" if the id is unknown."""
        section = self.get(section_id)
        return section.path if section else ""

    def resolve(self, name: str) -> Section | None:
        """Find a section by id, path or display name."""
        return next(
            (s for s in self._sections if name in (s.id, s.path, s.name)),
            None,
        )


class StaticIdentifierSource:
    """Identifier list embedded in configuration."""

    def __init__(self, identifiers: Iterable[str]) -> None:
        self._identifiers = list(identifiers)

    def list_identifiers(self) -> list[str]:
        return list(self._identifiers)


class JsonIndexIdentifierSource:
    """Identifier list loaded from a generated ``files-index.json``.

    The list is fetched once and kept until ``invalidate()`` is called. When the
    index is missing or malformed the fallback identifiers are used instead.
    """

    def __init__(
        self,
        fetcher: FetcherProtocol,
        index_path: str,
        *,
        fallback: Iterable[str] = (),
    ) -> None:
        self._fetcher = fetcher
        self.index_path = index_path
        self._fallback = list(fallback)
        self._cached: list[str] | None = None

    def list_identifiers(self) -> list[str]:
        if self._cached is None:
            self._cached = self._load()
        return list(self._cached)

    def invalidate(self) -> None:
        self._cached = None

    def _load(self) -> list[str]:
        raw = self._fetcher.fetch(self.index_path)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Index {} is not valid JSON, using static list", self.index_path)
            return list(self._fallback)
        if not isinstance(data, list) or not all(isinstance(x, str) for x in data):
            logger.warning("Index {} is not a list of file names, using static list", self.index_path)
            return list(self._fallback)
        logger.debug("Loaded {} identifiers from {}", len(data), self.index_path)
        return data


def default_identifier_sources(fetcher: FetcherProtocol) -> dict[str, IdentifierSourceProtocol]:
    """Build the identifier source of every configured section, keyed by path."""
    sources: dict[str, IdentifierSourceProtocol] = {}
    for section in SECTIONS:
        static = SECTION_FILES.get(section.path, ())
        if section.path in INDEXED_SECTIONS:
            sources[section.path] = JsonIndexIdentifierSource(
                fetcher, f"{section.path}/{FILES_INDEX_NAME}", fallback=static
            )
        else:
            sources[section.path] = StaticIdentifierSource(static)
    return sources


def generate_files_index(directory: Path) -> list[str]:
    """Write a sorted ``files-index.json`` listing the markdown files of a directory.

    Returns:
        The list of file names written.
    """
    if not directory.is_dir():
        msg = f"Directory not found: {directory}"
        raise FileNotFoundError(msg)

    files = sorted(p.name for p in directory.glob("*.md") if p.is_file())
    output = directory / FILES_INDEX_NAME
    output.write_text(json.dumps(files, indent=2) + "\n", encoding="utf-8")
    logger.info("Index generated: {} files listed in {}", len(files), output)
    return files
