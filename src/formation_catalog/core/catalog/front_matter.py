"""Parse the front-matter header block of markdown documents.

Format::

    ---
    title: "Variables et Types"
    order: 2
    parent: 01-introduction.md
    tags: [bases, types]
    ---
    # Document body

Only a restricted ``key: value`` syntax is understood. Values are coerced into
a closed set of types (str, int, float, None, list of str) before being mapped
onto DocumentMetadata.
"""

import re
from typing import Any

from formation_catalog.models.entry import DocumentMetadata

FrontMatterValue = str | int | float | None | list[str]

_BLOCK_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n(.*)$", re.DOTALL)
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def coerce_value(raw: str) -> FrontMatterValue:
    """Coerce a raw header value into its typed form.

    Rules, in order: strip one layer of matching quotes; ``[a, b]`` becomes a
    list of strings; ``null`` becomes None; a numeric literal becomes an int or
    float; anything else stays a trimmed string.
    """
    value = _strip_quotes(raw.strip())

    if value.startswith("[") and value.endswith("]"):
        items = (item.strip().replace('"', "").replace("'", "") for item in value[1:-1].split(","))
        return [item for item in items if item]
    if value == "null":
        return None
    if _INT_RE.match(value):
        return int(value)
    if _NUMBER_RE.match(value):
        return float(value)
    return value


def parse_header(header: str) -> dict[str, FrontMatterValue]:
    """Parse the lines between the delimiters into a raw key/value map."""
    raw: dict[str, FrontMatterValue] = {}
    for line in header.split("\n"):
        colon = line.find(":")
        if colon <= 0:
            continue
        key = line[:colon].strip()
        raw[key] = coerce_value(line[colon + 1 :])
    return raw


def _as_tags(value: Any) -> tuple[str, ...]:
    if isinstance(value, list):
        return tuple(str(v) for v in value)
    if value is None or value == "":
        return ()
    return (str(value),)


def to_metadata(raw: dict[str, FrontMatterValue]) -> DocumentMetadata:
    """Map a raw header map onto the typed metadata fields."""
    title = raw.get("title")
    order = raw.get("order")
    parent = raw.get("parent")
    return DocumentMetadata(
        title=str(title) if title not in (None, "") else "",
        order=order if isinstance(order, (int, float)) and not isinstance(order, bool) else 0,
        parent=str(parent) if parent not in (None, "") else None,
        tags=_as_tags(raw.get("tags")),
        extra=dict(raw),
    )


def parse_front_matter(content: str) -> tuple[DocumentMetadata | None, str]:
    """Split a document into its metadata and body.

    Returns:
        Tuple of (metadata, body). Metadata is None when the document has no
        header block, in which case the body is the whole text.
    """
    match = _BLOCK_RE.match(content)
    if not match:
        return None, content
    return to_metadata(parse_header(match.group(1))), match.group(2)
