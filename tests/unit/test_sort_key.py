"""Tests for sort-key extraction, folding and category lookup."""

from formation_catalog.core.catalog.sort_key import (
    category_for_sort_key,
    extract_sort_key,
    sort_key_to_number,
)


def test_parent_sorts_before_children_and_next_sibling() -> None:
    assert (
        sort_key_to_number("21")
        < sort_key_to_number("21-01")
        < sort_key_to_number("21-02")
        < sort_key_to_number("22")
    )


def test_siblings_sort_numerically_not_lexically() -> None:
    assert sort_key_to_number("9") < sort_key_to_number("10")
    assert sort_key_to_number("21-09") < sort_key_to_number("21-10")


def test_third_level_stays_within_its_parent() -> None:
    assert (
        sort_key_to_number("21-01")
        < sort_key_to_number("21-01-05")
        < sort_key_to_number("21-02")
    )


def test_unparsable_parts_count_as_zero() -> None:
    assert sort_key_to_number("21-xx") == sort_key_to_number("21")


def test_extract_sort_key_from_dashed_prefix() -> None:
    assert extract_sort_key("21-01-openai-api.md") == "21-01"
    assert extract_sort_key("21-llm-exploitation.md") == "21"


def test_extract_sort_key_ignores_directory_prefix() -> None:
    assert extract_sort_key("Python/23-02-collections-et-vecteurs.md") == "23-02"


def test_extract_sort_key_defaults_to_999() -> None:
    assert extract_sort_key("annexe.md") == "999"
    assert extract_sort_key("21.md") == "999"


def test_unprefixed_key_sorts_after_prefixed_ones() -> None:
    default = sort_key_to_number(extract_sort_key("annexe.md"))
    assert default > sort_key_to_number("51-99-99")


def test_category_ranges_for_python() -> None:
    assert category_for_sort_key("01", "Python") == "Bases Python"
    assert category_for_sort_key("12", "Python") == "Bases Python"
    assert category_for_sort_key("21-01", "Python") == "Intelligence Artificielle"
    assert category_for_sort_key("30", "Python") == "Applications"
    assert category_for_sort_key("42-03", "Python") == "DevOps et Production"
    assert category_for_sort_key("51", "Python") == "Projets Pratiques"


def test_category_tables_differ_per_section() -> None:
    assert category_for_sort_key("40", "Rust") == "Rust avancé"
    assert category_for_sort_key("40", "Obsidian") == "Usages avancés"


def test_category_falls_back_to_other() -> None:
    assert category_for_sort_key("999", "Python") == "Other"
    assert category_for_sort_key("0", "Python") == "Other"
    assert category_for_sort_key("01", "Unknown") == "Other"
