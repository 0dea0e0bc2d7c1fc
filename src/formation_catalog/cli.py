"""CLI for the formation catalog (browse, search, suggest, offline cache)."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from formation_catalog.config import (
    CACHE_DB_NAME,
    CACHE_MAX_BYTES,
    resolve_content_root,
    resolve_data_directory,
)
from formation_catalog.core.catalog.builder import CatalogBuilder
from formation_catalog.core.catalog.sources import (
    SectionRegistry,
    default_identifier_sources,
    generate_files_index,
)
from formation_catalog.core.offline.cache import OfflineCache
from formation_catalog.core.offline.connectivity import ConnectivityMonitor
from formation_catalog.core.offline.reader import DocumentReader
from formation_catalog.core.offline.store import SqliteBlobStore
from formation_catalog.core.search.searcher import (
    list_all_categories,
    list_all_tags,
    search_entries,
)
from formation_catalog.core.search.suggestions import popular, similar_to, trending
from formation_catalog.core.stats import collect_stats
from formation_catalog.core.tree.markdown import (
    render_categories_as_markdown,
    render_tree_as_markdown,
)
from formation_catalog.core.tree.navigation import find_by_slug, get_breadcrumbs
from formation_catalog.fetcher import make_fetcher
from formation_catalog.logging_config import configure_logging
from formation_catalog.models.entry import CatalogEntry, Difficulty, SearchFilters
from formation_catalog.protocols import FetcherProtocol

app = typer.Typer(help="Formation catalog: browse, search and cache course articles.")

_registry = SectionRegistry()

ContentOption = Annotated[
    str | None,
    typer.Option("--content", "-C", help="Content root (directory or http(s) URL)"),
]
DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Offline cache directory"),
]
SectionArgument = Annotated[str, typer.Argument(help="Section id, path or name")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _make_fetcher(content: str | None) -> FetcherProtocol:
    root = content or resolve_content_root()
    if root is None:
        logger.error("No content root found. Pass --content or set FORMATION_CATALOG_CONTENT.")
        raise typer.Exit(1)
    return make_fetcher(root)


def _section_path(section: str) -> str:
    found = _registry.resolve(section)
    if found is None:
        logger.error("Unknown section: {}", section)
        raise typer.Exit(1)
    return found.path


def _load_tree(section: str, content: str | None) -> list[CatalogEntry]:
    fetcher = _make_fetcher(content)
    builder = CatalogBuilder(fetcher, default_identifier_sources(fetcher))
    return asyncio.run(builder.build_catalog(_section_path(section)))


def _open_cache(data_dir: Path | None) -> tuple[SqliteBlobStore, OfflineCache]:
    dst = data_dir or resolve_data_directory()
    store = SqliteBlobStore.open(dst / CACHE_DB_NAME, max_bytes=CACHE_MAX_BYTES)
    return store, OfflineCache(store)


def _entry_dict(entry: CatalogEntry) -> dict[str, object]:
    return {
        "slug": entry.slug,
        "title": entry.title,
        "path": entry.source_path,
        "category": entry.category,
        "tags": list(entry.tags),
        "level": entry.level,
    }


@app.command()
def sections() -> None:
    """List the available sections."""
    for s in _registry.all():
        icon = f"{s.icon} " if s.icon else ""
        typer.echo(f"  {icon}{s.name} [id={s.id}, path={s.path}]")
        typer.echo(f"    {s.description}")


@app.command()
def tree(
    section: SectionArgument,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    show_tags: bool = typer.Option(False, "--tags", help="Show tags after titles"),
    by_category: bool = typer.Option(False, "--by-category", help="Group by category"),
    content: ContentOption = None,
) -> None:
    """Show the article hierarchy of a section as markdown."""
    roots = _load_tree(section, content)
    if by_category:
        typer.echo(render_categories_as_markdown(roots))
    else:
        typer.echo(render_tree_as_markdown(roots, max_depth=max_depth, include_tags=show_tags))


@app.command()
def categories(section: SectionArgument, content: ContentOption = None) -> None:
    """List the categories of a section."""
    for category in list_all_categories(_load_tree(section, content)):
        typer.echo(f"  {category}")


@app.command()
def tags(section: SectionArgument, content: ContentOption = None) -> None:
    """List the tags used in a section."""
    for tag in list_all_tags(_load_tree(section, content)):
        typer.echo(f"  {tag}")


@app.command()
def search(
    section: SectionArgument,
    query: Annotated[str | None, typer.Option("--query", "-q", help="Title/slug text")] = None,
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Tag filter (repeatable, any matches)"),
    ] = None,
    category: Annotated[str | None, typer.Option("--category", "-c", help="Exact category")] = None,
    difficulty: Annotated[
        Difficulty | None,
        typer.Option("--difficulty", help="Difficulty level"),
    ] = None,
    path: Annotated[
        str | None,
        typer.Option("--path", "-p", help="Only entries whose path contains this"),
    ] = None,
    min_minutes: Annotated[int | None, typer.Option("--min-minutes")] = None,
    max_minutes: Annotated[int | None, typer.Option("--max-minutes")] = None,
    limit: int = typer.Option(10, "--limit", "-n", help="Max results"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
    content: ContentOption = None,
) -> None:
    """Search a section's articles."""
    filters = SearchFilters(
        query=query,
        tags=tuple(tag) if tag else None,
        category=category,
        section=path,
        difficulty=difficulty,
        min_reading_minutes=min_minutes,
        max_reading_minutes=max_minutes,
    )
    results = search_entries(_load_tree(section, content), filters)
    shown = results[:limit]

    if output_json:
        data = {
            "results": [
                {
                    **_entry_dict(r.entry),
                    "relevance": r.relevance,
                    "matched_fields": list(r.matched_fields),
                }
                for r in shown
            ],
            "total": len(results),
        }
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    typer.echo(f"Found {len(results)} results (showing {len(shown)}):\n")
    for r in shown:
        typer.echo(f"  [{r.entry.category}] {r.entry.title}")
        fields = ", ".join(r.matched_fields) or "-"
        typer.echo(f"    slug={r.entry.slug}  relevance={r.relevance}  matched={fields}")
        typer.echo()


@app.command()
def similar(
    section: SectionArgument,
    slug: str = typer.Argument(..., help="Article slug"),
    limit: int = typer.Option(5, "--limit", "-n", help="Max suggestions"),
    content: ContentOption = None,
) -> None:
    """Suggest articles similar to the given one."""
    suggestions = similar_to(_load_tree(section, content), slug, limit)
    if not suggestions:
        typer.echo(f"No suggestions for '{slug}'.")
        return
    for s in suggestions:
        typer.echo(f"  {s.entry.title} (slug={s.entry.slug})  score={s.score}  {s.reason}")


@app.command(name="popular")
def popular_cmd(
    section: SectionArgument,
    limit: int = typer.Option(10, "--limit", "-n", help="Max results"),
    content: ContentOption = None,
) -> None:
    """Show popular articles."""
    for entry in popular(_load_tree(section, content), limit):
        typer.echo(f"  {entry.title} (slug={entry.slug})")


@app.command(name="trending")
def trending_cmd(
    section: SectionArgument,
    limit: int = typer.Option(10, "--limit", "-n", help="Max results"),
    content: ContentOption = None,
) -> None:
    """Show trending articles."""
    for entry in trending(_load_tree(section, content), limit):
        typer.echo(f"  {entry.title} (slug={entry.slug})")


@app.command()
def read(
    section: SectionArgument,
    slug: str = typer.Argument(..., help="Article slug"),
    offline: bool = typer.Option(False, "--offline", help="Prefer the offline cache"),
    content: ContentOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Print an article, caching it for offline reading."""
    fetcher = _make_fetcher(content)
    builder = CatalogBuilder(fetcher, default_identifier_sources(fetcher))
    roots = asyncio.run(builder.build_catalog(_section_path(section)))

    entry = find_by_slug(roots, slug)
    if entry is None:
        typer.echo(f"Article '{slug}' not found.")
        raise typer.Exit(1)

    store, cache = _open_cache(data_dir)
    try:
        reader = DocumentReader(fetcher, cache, ConnectivityMonitor(online=not offline))
        body = reader.read(entry)
    finally:
        store.close()

    crumbs = get_breadcrumbs(roots, slug)
    if crumbs:
        typer.echo(" > ".join(c.title for c in crumbs))
        typer.echo()
    typer.echo(body)


@app.command()
def index(
    directory: Path = typer.Argument(..., help="Section directory with .md files"),
) -> None:
    """Generate files-index.json for a section directory."""
    if not directory.is_dir():
        logger.error("Directory not found: {}", directory)
        raise typer.Exit(1)
    files = generate_files_index(directory)
    typer.echo(f"Indexed {len(files)} files in {directory}")


@app.command()
def stats(
    section: SectionArgument,
    content: ContentOption = None,
    data_dir: DataDirOption = None,
) -> None:
    """Show catalog and cache statistics."""
    roots = _load_tree(section, content)
    store, cache = _open_cache(data_dir)
    try:
        result = collect_stats(roots, _registry.all(), cache)
    finally:
        store.close()

    typer.echo(f"Articles: {result.total_entries}")
    typer.echo(f"Sections: {result.total_sections}")
    typer.echo(f"Cached articles: {result.cached_entries} ({result.cache_size_mb:.2f} MB)")
    for category, count in result.entries_by_category.items():
        typer.echo(f"  {category}: {count}")


@app.command(name="cache-info")
def cache_info(data_dir: DataDirOption = None) -> None:
    """List cached articles."""
    store, cache = _open_cache(data_dir)
    try:
        entries = cache.cached_entries()
        typer.echo(f"{len(entries)} cached articles ({cache.size_estimate_mb():.2f} MB):\n")
        for e in entries:
            typer.echo(f"  {e.title} [{e.source_path}]")
    finally:
        store.close()


@app.command(name="cache-purge")
def cache_purge(data_dir: DataDirOption = None) -> None:
    """Remove expired articles from the offline cache."""
    store, cache = _open_cache(data_dir)
    try:
        removed = cache.purge_expired()
        typer.echo(f"Removed {removed} expired articles")
    finally:
        store.close()


@app.command(name="cache-clear")
def cache_clear(data_dir: DataDirOption = None) -> None:
    """Empty the offline cache."""
    store, cache = _open_cache(data_dir)
    try:
        cache.clear()
        typer.echo("Offline cache cleared")
    finally:
        store.close()
