"""Tests for the formation catalog CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from formation_catalog.cli import app
from formation_catalog.core.catalog.sources import generate_files_index
from tests.unit.sample_docs import PYTHON_DOCUMENTS

runner = CliRunner()


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Content root holding the Python sample documents and their index."""
    root = tmp_path / "content"
    for path, text in PYTHON_DOCUMENTS.items():
        fname = root / path
        fname.parent.mkdir(parents=True, exist_ok=True)
        fname.write_text(text, encoding="utf-8")
    generate_files_index(root / "Python")
    return root


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


def _parse_json(output: str) -> dict:
    # Log lines go to stderr, which the runner may interleave with stdout.
    return json.loads(output[output.index("{") :])


def test_sections_command() -> None:
    result = runner.invoke(app, ["sections"])
    assert result.exit_code == 0
    assert "Python [id=python, path=Python]" in result.output
    assert "Veille technologique [id=veille-technos, path=veille_technos]" in result.output


def test_tree_command(content_dir: Path) -> None:
    result = runner.invoke(app, ["tree", "python", "--content", str(content_dir)])
    assert result.exit_code == 0
    assert "- Exploitation des LLM (`21-llm-exploitation`)" in result.output
    assert "    - API OpenAI (`21-01-openai-api`)" in result.output


def test_tree_command_by_category(content_dir: Path) -> None:
    result = runner.invoke(
        app, ["tree", "Python", "--by-category", "--content", str(content_dir)]
    )
    assert result.exit_code == 0
    assert "## Intelligence Artificielle" in result.output


def test_tree_command_unknown_section(content_dir: Path) -> None:
    result = runner.invoke(app, ["tree", "cobol", "--content", str(content_dir)])
    assert result.exit_code == 1


def test_tree_command_without_content_root(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FORMATION_CATALOG_CONTENT", raising=False)
    monkeypatch.setattr("formation_catalog.config.CONTENT_DIRECTORIES", [])
    result = runner.invoke(app, ["tree", "python"])
    assert result.exit_code == 1


def test_content_root_from_environment(
    content_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("FORMATION_CATALOG_CONTENT", str(content_dir))
    result = runner.invoke(app, ["categories", "python"])
    assert result.exit_code == 0
    assert "Projets Pratiques" in result.output


def test_tags_command(content_dir: Path) -> None:
    result = runner.invoke(app, ["tags", "python", "--content", str(content_dir)])
    assert result.exit_code == 0
    assert "  qdrant" in result.output


def test_search_command_json(content_dir: Path) -> None:
    result = runner.invoke(
        app,
        ["search", "python", "-q", "qdrant", "-t", "ia", "--json", "--content", str(content_dir)],
    )
    assert result.exit_code == 0
    data = _parse_json(result.output)
    assert data["total"] == 5
    top = data["results"][0]
    assert top["slug"] == "23-qdrant"
    assert top["relevance"] == 45
    assert top["matched_fields"] == ["title", "slug", "tags"]


def test_search_command_text_with_limit(content_dir: Path) -> None:
    result = runner.invoke(
        app, ["search", "python", "-t", "bases", "-n", "2", "--content", str(content_dir)]
    )
    assert result.exit_code == 0
    assert "Found 4 results (showing 2):" in result.output


def test_search_command_difficulty(content_dir: Path) -> None:
    result = runner.invoke(
        app,
        ["search", "python", "--difficulty", "avancé", "--json", "--content", str(content_dir)],
    )
    assert result.exit_code == 0
    data = _parse_json(result.output)
    assert [r["slug"] for r in data["results"]] == ["50-projets-pratiques"]


def test_similar_command(content_dir: Path) -> None:
    result = runner.invoke(
        app, ["similar", "python", "23-qdrant", "-n", "1", "--content", str(content_dir)]
    )
    assert result.exit_code == 0
    assert "23-01-installation-et-configuration" in result.output
    assert "score=45" in result.output


def test_similar_command_unknown_slug(content_dir: Path) -> None:
    result = runner.invoke(app, ["similar", "python", "nope", "--content", str(content_dir)])
    assert result.exit_code == 0
    assert "No suggestions for 'nope'." in result.output


def test_popular_and_trending_commands(content_dir: Path) -> None:
    for command in ("popular", "trending"):
        result = runner.invoke(app, [command, "python", "-n", "1", "--content", str(content_dir)])
        assert result.exit_code == 0
        assert "Introduction (slug=01-introduction)" in result.output
        assert "Variables et Types" not in result.output


def test_read_command_caches_for_offline_use(
    content_dir: Path, data_dir: Path
) -> None:
    args = ["read", "python", "21-01-openai-api", "--content", str(content_dir)]
    result = runner.invoke(app, [*args, "--data-dir", str(data_dir)])
    assert result.exit_code == 0
    assert "Exploitation des LLM\n" in result.output
    assert "# API OpenAI" in result.output

    (content_dir / "Python" / "21-01-openai-api.md").write_text(
        "---\ntitle: API OpenAI\n---\n# Nouvelle version", encoding="utf-8"
    )
    offline = runner.invoke(app, [*args, "--offline", "--data-dir", str(data_dir)])
    assert offline.exit_code == 0
    assert "# API OpenAI" in offline.output
    assert "Nouvelle version" not in offline.output


def test_read_command_unknown_slug(content_dir: Path, data_dir: Path) -> None:
    result = runner.invoke(
        app,
        ["read", "python", "nope", "--content", str(content_dir), "--data-dir", str(data_dir)],
    )
    assert result.exit_code == 1
    assert "Article 'nope' not found." in result.output


def test_index_command(tmp_path: Path) -> None:
    (tmp_path / "01-a.md").write_text("a")
    result = runner.invoke(app, ["index", str(tmp_path)])
    assert result.exit_code == 0
    assert "Indexed 1 files" in result.output
    assert json.loads((tmp_path / "files-index.json").read_text()) == ["01-a.md"]


def test_index_command_missing_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["index", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_stats_command(content_dir: Path, data_dir: Path) -> None:
    result = runner.invoke(
        app, ["stats", "python", "--content", str(content_dir), "--data-dir", str(data_dir)]
    )
    assert result.exit_code == 0
    assert "Articles: 11" in result.output
    assert "Sections: 7" in result.output
    assert "Intelligence Artificielle: 5" in result.output


def test_cache_commands(content_dir: Path, data_dir: Path) -> None:
    runner.invoke(
        app,
        ["read", "python", "23-qdrant", "--content", str(content_dir), "--data-dir", str(data_dir)],
    )

    info = runner.invoke(app, ["cache-info", "--data-dir", str(data_dir)])
    assert info.exit_code == 0
    assert "1 cached articles" in info.output
    assert "Qdrant [Python/23-qdrant.md]" in info.output

    purge = runner.invoke(app, ["cache-purge", "--data-dir", str(data_dir)])
    assert purge.exit_code == 0
    assert "Removed 0 expired articles" in purge.output

    clear = runner.invoke(app, ["cache-clear", "--data-dir", str(data_dir)])
    assert clear.exit_code == 0
    assert "Offline cache cleared" in clear.output

    info = runner.invoke(app, ["cache-info", "--data-dir", str(data_dir)])
    assert "0 cached articles" in info.output
