"""Tests for CLI commands."""

import importlib
import json
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from prouvesearch import __version__

from .main import app

runner = CliRunner()

WORKS = [
    {
        "id": "maison-tropicale",
        "title": "Maison Tropicale",
        "year": 1949,
        "location": "Niamey, Niger",
        "category": {"id": "residential", "name": "Residential"},
        "description": "Prefabricated aluminium house for tropical climates.",
        "status": "reconstructed",
    },
    {
        "id": "maisons-de-meudon",
        "title": "Maisons de Meudon",
        "year": 1950,
        "location": "Meudon, France",
        "category": {"id": "residential", "name": "Residential"},
        "description": "Demountable steel houses on a hillside.",
        "status": "existing",
    },
]

SCHOLARS = [
    {
        "id": "catherine-coley",
        "name": "Catherine Coley",
        "institution": "École d'architecture de Nancy",
        "country": "France",
        "region": "europe",
        "specialization": ["architecturalHistory", "prefabricatedConstruction"],
        "publications": [
            {"id": "coley-1", "title": "Jean Prouvé en son temps", "type": "book", "year": 2010}
        ],
    }
]

BIOGRAPHY = [
    {
        "id": "biography-overview",
        "section": "overview",
        "title": "Jean Prouvé",
        "body": "Constructor and designer.",
        "birth_year": 1901,
        "death_year": 1984,
    },
    {
        "id": "biography-career-0",
        "section": "career",
        "title": "Ateliers Jean Prouvé",
        "organization": "Ateliers Jean Prouvé",
        "period": "1931-1954",
    },
]


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render tables wide enough that ids are never truncated."""
    module = importlib.import_module("prouvesearch.interfaces.cli.main")
    monkeypatch.setattr(module, "console", Console(width=200))


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Corpus directory with two works, a scholar and two biography facts."""
    for filename, records in (
        ("works.json", WORKS),
        ("scholars.json", SCHOLARS),
        ("biography.json", BIOGRAPHY),
    ):
        (tmp_path / filename).write_text(json.dumps(records), encoding="utf-8")
    return tmp_path


def invoke(data_dir: Path, *args: str):
    """Run the CLI against a corpus directory."""
    return runner.invoke(app, ["--data", str(data_dir), *args])


def test_version() -> None:
    """Test version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


# --- Search Tests ---


def test_search_term(data_dir: Path) -> None:
    """Test a term matching a single work."""
    result = invoke(data_dir, "search", "tropical")
    assert result.exit_code == 0
    assert "maison-tropicale" in result.output
    assert "maisons-de-meudon" not in result.output
    assert "Showing 1 of 1" in result.output


def test_search_type_and_sort(data_dir: Path) -> None:
    """Test type filter with year ordering."""
    result = invoke(data_dir, "search", "", "--type", "work", "--sort", "year")
    assert result.exit_code == 0
    assert result.output.index("maisons-de-meudon") < result.output.index("maison-tropicale")
    assert "Showing 2 of 2" in result.output


def test_search_year_range(data_dir: Path) -> None:
    """Test --from and --to build a year range filter."""
    result = invoke(data_dir, "search", "--type", "work", "--from", "1950", "--to", "1960")
    assert result.exit_code == 0
    assert "maisons-de-meudon" in result.output
    assert "maison-tropicale" not in result.output


def test_search_limit(data_dir: Path) -> None:
    """Test --limit bounds the displayed results but not the total."""
    result = invoke(data_dir, "search", "--limit", "2")
    assert result.exit_code == 0
    assert "Showing 2 of 5" in result.output


def test_search_invalid_sort(data_dir: Path) -> None:
    """Test an unknown sort option is reported."""
    result = invoke(data_dir, "search", "maison", "--sort", "bogus")
    assert result.exit_code == 1
    assert "Invalid search query" in result.output


def test_search_bundled_corpus() -> None:
    """Test searching the corpus shipped with the package."""
    result = runner.invoke(app, ["search", "maison"])
    assert result.exit_code == 0
    assert "maison-tropicale" in result.output


def test_missing_corpus(tmp_path: Path) -> None:
    """Test an unreadable corpus exits with the error code."""
    result = invoke(tmp_path / "nowhere", "search", "maison")
    assert result.exit_code == 1
    assert "CORPUS_UNAVAILABLE" in result.output


# --- Suggestion and Filter Tests ---


def test_suggest(data_dir: Path) -> None:
    """Test suggestions for a partial title."""
    result = invoke(data_dir, "suggest", "mai")
    assert result.exit_code == 0
    assert "Maison Tropicale" in result.output
    assert "Maisons de Meudon" in result.output


def test_suggest_too_short(data_dir: Path) -> None:
    """Test a single character yields no suggestions."""
    result = invoke(data_dir, "suggest", "m")
    assert result.exit_code == 0
    assert "No suggestions" in result.output


def test_filters(data_dir: Path) -> None:
    """Test filter dimensions listing."""
    result = invoke(data_dir, "filters")
    assert result.exit_code == 0
    assert "residential" in result.output
    assert "europe" in result.output
    assert "Years: 1901-2010" in result.output


# --- Recommendation Tests ---


def test_recommend_work(data_dir: Path) -> None:
    """Test work recommendations list related records with reasons."""
    result = invoke(data_dir, "recommend", "work", "maison-tropicale")
    assert result.exit_code == 0
    for record_id in ("catherine-coley", "biography-career-0", "maisons-de-meudon"):
        assert record_id in result.output
    assert "Career period: 1931-1954" in result.output


def test_recommend_requires_seed(data_dir: Path) -> None:
    """Test seeded kinds need an id."""
    result = invoke(data_dir, "recommend", "work")
    assert result.exit_code == 1
    assert "need a seed id" in result.output


def test_recommend_general_limit(data_dir: Path) -> None:
    """Test general recommendations honour --limit."""
    result = invoke(data_dir, "recommend", "general", "--limit", "1")
    assert result.exit_code == 0
    assert "maisons-de-meudon" in result.output
    assert "catherine-coley" not in result.output


def test_recommend_biography_section(data_dir: Path) -> None:
    """Test biography section recommendations."""
    result = invoke(data_dir, "recommend", "biography", "career", "--type", "scholar")
    assert result.exit_code == 0
    assert "catherine-coley" in result.output
    assert "Architectural history expert" in result.output


def test_recommend_nothing_related(data_dir: Path) -> None:
    """Test an empty recommendation list is reported."""
    result = invoke(data_dir, "recommend", "scholar", "catherine-coley", "--type", "scholar")
    assert result.exit_code == 0
    assert "No recommendations" in result.output


def test_recommend_unknown_type(data_dir: Path) -> None:
    """Test unknown content types are rejected."""
    result = invoke(data_dir, "recommend", "general", "--type", "video")
    assert result.exit_code == 1
