"""Render catalog trees as markdown outlines."""

import io

from formation_catalog.core.tree.navigation import group_by_category
from formation_catalog.models.entry import CatalogEntry


def render_tree_as_markdown(
    tree: list[CatalogEntry],
    *,
    max_depth: int | None = None,
    include_tags: bool = False,
) -> str:
    """Render a catalog tree as an indented markdown bullet list.

    Args:
        tree: Root entries, as returned by the catalog builder.
        max_depth: Max levels below the roots to include (None = unlimited).
        include_tags: Append each entry's tags after its title.

    Returns:
        Markdown string with bullet-list hierarchy.
    """
    out = io.StringIO()

    def write(entries: list[CatalogEntry], depth: int) -> None:
        for entry in entries:
            indent = "    " * depth
            line = f"{indent}- {entry.title} (`{entry.slug}`)"
            if include_tags and entry.tags:
                line += " " + " ".join(f"#{t}" for t in entry.tags)
            out.write(line + "\n")

            if not entry.children:
                continue
            if max_depth is not None and depth >= max_depth:
                count = len(entry.children)
                noun = "child" if count == 1 else "children"
                out.write(f"{indent}    - ... ({count} more {noun}, slug={entry.slug})\n")
                continue
            write(entry.children, depth + 1)

    write(tree, 0)
    return out.getvalue()


def render_categories_as_markdown(tree: list[CatalogEntry]) -> str:
    """Render every entry under a heading per category."""
    out = io.StringIO()
    for category, entries in group_by_category(tree).items():
        out.write(f"## {category}\n\n")
        for entry in entries:
            out.write(f"{'    ' * entry.level}- {entry.title} (`{entry.slug}`)\n")
        out.write("\n")
    return out.getvalue()
