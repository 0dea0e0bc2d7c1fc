"""Tests for the front-matter parser."""

from formation_catalog.core.catalog.front_matter import (
    coerce_value,
    parse_front_matter,
    parse_header,
)
from formation_catalog.models.entry import DocumentMetadata


def test_parse_example_header() -> None:
    text = '---\ntitle: "Intro"\norder: 1\ntags: [a, b]\n---\nBody text'
    metadata, body = parse_front_matter(text)
    assert metadata == DocumentMetadata(title="Intro", order=1, parent=None, tags=("a", "b"))
    assert body == "Body text"


def test_text_without_delimiters_has_no_metadata() -> None:
    text = "# Title\n\ntitle: not a header"
    metadata, body = parse_front_matter(text)
    assert metadata is None
    assert body == text


def test_unclosed_header_has_no_metadata() -> None:
    metadata, _body = parse_front_matter("---\ntitle: Intro\n# no closing line")
    assert metadata is None


def test_defaults_for_missing_keys() -> None:
    metadata, _body = parse_front_matter("---\nauthor: Jane\n---\nBody")
    assert metadata is not None
    assert metadata.title == ""
    assert metadata.order == 0
    assert metadata.parent is None
    assert metadata.tags == ()


def test_unknown_keys_are_kept_in_extra() -> None:
    metadata, _body = parse_front_matter("---\ntitle: T\nauthor: Jane\nlevel: 3\n---\nBody")
    assert metadata is not None
    assert metadata.extra["author"] == "Jane"
    assert metadata.extra["level"] == 3


def test_parent_reference_and_null() -> None:
    metadata, _body = parse_front_matter("---\nparent: 21-llm-exploitation.md\n---\n")
    assert metadata is not None
    assert metadata.parent == "21-llm-exploitation.md"

    metadata, _body = parse_front_matter("---\nparent: null\n---\n")
    assert metadata is not None
    assert metadata.parent is None


def test_value_splits_on_first_colon_only() -> None:
    raw = parse_header("title: Python: les bases\n: ignored\nno colon here")
    assert raw == {"title": "Python: les bases"}


def test_single_tag_string_becomes_one_tag() -> None:
    metadata, _body = parse_front_matter("---\ntags: bases\n---\n")
    assert metadata is not None
    assert metadata.tags == ("bases",)


def test_coerce_strips_one_layer_of_quotes() -> None:
    assert coerce_value('"quoted"') == "quoted"
    assert coerce_value("'single'") == "single"
    assert coerce_value("\"'nested'\"") == "'nested'"
    assert coerce_value("'mismatched\"") == "'mismatched\""


def test_coerce_lists() -> None:
    assert coerce_value("[a, 'b', \"c\"]") == ["a", "b", "c"]
    assert coerce_value("[]") == []
    assert coerce_value('"[x, y]"') == ["x", "y"]


def test_coerce_null_and_numbers() -> None:
    assert coerce_value("null") is None
    assert coerce_value("12") == 12
    assert isinstance(coerce_value("12"), int)
    assert coerce_value("-3") == -3
    assert coerce_value("1.5") == 1.5
    assert coerce_value("12abc") == "12abc"
    assert coerce_value("nan") == "nan"


def test_coerce_quoted_number_is_still_a_number() -> None:
    assert coerce_value('"7"') == 7


def test_numeric_title_is_kept_as_text() -> None:
    metadata, _body = parse_front_matter("---\ntitle: 2024\n---\n")
    assert metadata is not None
    assert metadata.title == "2024"
