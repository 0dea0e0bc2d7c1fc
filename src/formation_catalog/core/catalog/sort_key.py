"""Numeric sort keys extracted from document file names."""

import re
from pathlib import PurePosixPath

from formation_catalog.config import CATEGORY_RANGES, DEFAULT_SORT_KEY, FALLBACK_CATEGORY

_SORT_KEY_RE = re.compile(r"^(\d+(?:-\d+)*)-")

# Positional weights: the first segment counts in millions, each further
# segment a thousand times less.
_FIRST_WEIGHT = 1_000_000
_WEIGHT_STEP = 1_000


def extract_sort_key(identifier: str) -> str:
    """Extract the numeric prefix of a document file name.

    "21-01-openai-api.md" -> "21-01". Any directory prefix is ignored.
    Returns "999" when the name has no numeric prefix.
    """
    name = PurePosixPath(identifier).name
    match = _SORT_KEY_RE.match(name)
    return match.group(1) if match else DEFAULT_SORT_KEY


def _parse_part(part: str) -> int:
    try:
        value = int(part)
    except ValueError:
        return 0
    return max(value, 0)


def sort_key_to_number(sort_key: str) -> int:
    """Fold a dashed sort key into a single comparable integer.

    "21" -> 21_000_000, "21-01" -> 21_001_000, "21-02" -> 21_002_000, so a
    parent sorts before its children and siblings sort numerically.
    """
    result = 0
    weight = _FIRST_WEIGHT
    for part in sort_key.split("-"):
        result += _parse_part(part) * weight
        weight //= _WEIGHT_STEP
    return result


def category_for_sort_key(sort_key: str, section: str) -> str:
    """Map a sort key to the category label of its range in ``section``."""
    number = sort_key_to_number(sort_key)
    for start, end, label in CATEGORY_RANGES.get(section, ()):
        if start <= number < end:
            return label
    return FALLBACK_CATEGORY
