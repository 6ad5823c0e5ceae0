"""
CLI Main - Typer-based command-line interface.

Usage:
    prouvesearch search "maison" --type work --sort year
    prouvesearch suggest mai
    prouvesearch recommend work maison-tropicale
    prouvesearch --data ./corpus filters
    prouvesearch serve
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from prouvesearch.config import ProuveSearchError, get_settings

app = typer.Typer(
    name="prouvesearch",
    help="Prouvé Archive - search and recommendations",
    add_completion=False,
)
console = Console()

# Bounds used when only one side of a year range is given
EARLIEST_YEAR = 0
LATEST_YEAR = 9999


class RecommendationKind(str, Enum):
    """Seed kinds accepted by the recommend command."""

    WORK = "work"
    SCHOLAR = "scholar"
    BIOGRAPHY = "biography"
    GENERAL = "general"


@app.callback()
def callback(
    ctx: typer.Context,
    data_dir: Path | None = typer.Option(
        None, "--data", "-d", help="Corpus directory (default: bundled corpus)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Search and explore the Jean Prouvé archive."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"data_dir": data_dir or get_settings().data_dir}


def _load_corpus(ctx: typer.Context):
    """Build the corpus snapshot, exiting with a message when it cannot be read."""
    from prouvesearch.adapters.content import JSONContentRepository
    from prouvesearch.domains.content import CorpusSnapshot

    data_dir = (ctx.obj or {}).get("data_dir")
    try:
        return CorpusSnapshot.from_repository(JSONContentRepository(data_dir))
    except ProuveSearchError as e:
        console.print(f"[red]Error:[/red] {escape(e.message)} ({e.code.value})")
        raise typer.Exit(1) from e


def _search_engine(ctx: typer.Context):
    from prouvesearch.domains.search import ContentSearchEngine, RelevanceScorer

    settings = get_settings()
    return ContentSearchEngine(
        _load_corpus(ctx),
        scorer=RelevanceScorer(settings.empty_term_baseline),
        excerpt_length=settings.search_excerpt_length,
        suggestion_min_length=settings.suggestion_min_length,
        suggestion_limit=settings.suggestion_limit,
    )


def _recommendation_engine(ctx: typer.Context):
    from prouvesearch.domains.recommendation import RecommendationEngine

    return RecommendationEngine(
        _load_corpus(ctx),
        excerpt_length=get_settings().recommendation_excerpt_length,
    )


@app.command()
def search(
    ctx: typer.Context,
    term: str = typer.Argument("", help="Search term (blank lists everything)"),
    content_types: list[str] | None = typer.Option(
        None, "--type", "-t", help="Content type: work, scholar or biography (repeatable)"
    ),
    categories: list[str] | None = typer.Option(
        None, "--category", "-c", help="Work category id (repeatable)"
    ),
    regions: list[str] | None = typer.Option(
        None, "--region", "-r", help="Scholar region id (repeatable)"
    ),
    year_from: int | None = typer.Option(None, "--from", help="Earliest year"),
    year_to: int | None = typer.Option(None, "--to", help="Latest year"),
    sort: str = typer.Option(
        "relevance", "--sort", "-s", help="relevance, year, title or secondary"
    ),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of results"),
) -> None:
    """Search works, scholars and biography facts."""
    from prouvesearch.domains.search import query_errors

    filters: dict[str, Any] = {}
    if content_types:
        filters["contentTypes"] = content_types
    if categories:
        filters["category"] = categories
    if regions:
        filters["region"] = regions
    if year_from is not None or year_to is not None:
        filters["yearRange"] = [
            year_from if year_from is not None else EARLIEST_YEAR,
            year_to if year_to is not None else LATEST_YEAR,
        ]
    payload = {"term": term, "filters": filters, "sortBy": sort}

    engine = _search_engine(ctx)
    query = engine.parse_search_query(payload)
    if query is None:
        console.print(
            Panel(
                escape("\n".join(query_errors(payload))),
                title="Invalid search query",
                style="red",
            )
        )
        raise typer.Exit(1)

    page = engine.search_page(query, page=1, page_size=limit)

    table = Table(title=f"Search: '{term}'" if term else "Search")
    table.add_column("Type", style="cyan")
    table.add_column("ID", style="green", no_wrap=True)
    table.add_column("Title")
    table.add_column("Score", justify="right")
    table.add_column("Excerpt", style="dim")

    for result in page.items:
        table.add_row(
            result.content_type.value,
            result.id,
            result.title,
            f"{result.relevance_score:.2f}",
            result.excerpt,
        )

    console.print(table)
    console.print(f"[dim]Showing {len(page.items)} of {page.total_count}[/dim]")


@app.command()
def suggest(
    ctx: typer.Context,
    partial: str = typer.Argument(..., help="Partial search term"),
) -> None:
    """Autocomplete suggestions for a partial term."""
    suggestions = _search_engine(ctx).get_search_suggestions(partial)
    if not suggestions:
        console.print("[yellow]No suggestions[/yellow]")
        return
    for suggestion in suggestions:
        console.print(suggestion)


@app.command()
def filters(ctx: typer.Context) -> None:
    """Show filter dimensions available in the corpus."""
    available = _search_engine(ctx).get_available_filters()

    for title, options in (
        ("Content types", available.types),
        ("Categories", available.categories),
        ("Regions", available.regions),
    ):
        table = Table(title=title)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="green")
        table.add_column("Count", justify="right")
        for option in options:
            table.add_row(option.id, option.name, str(option.count))
        console.print(table)

    if available.year_range is None:
        console.print("[dim]Years: none[/dim]")
    else:
        console.print(f"Years: {available.year_range[0]}-{available.year_range[1]}")


@app.command()
def recommend(
    ctx: typer.Context,
    kind: RecommendationKind = typer.Argument(..., help="Seed kind"),
    seed: str | None = typer.Argument(None, help="Work id, scholar id or biography section"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum items"),
    content_types: list[str] | None = typer.Option(
        None, "--type", "-t", help="Content type to include (repeatable)"
    ),
    exclude: list[str] | None = typer.Option(
        None, "--exclude", "-x", help="Record id to leave out (repeatable)"
    ),
) -> None:
    """Recommend related content for a work, scholar or biography section."""
    from prouvesearch.domains.content import ContentType
    from prouvesearch.domains.recommendation import RecommendationOptions
    from prouvesearch.domains.recommendation.models import ALL_CONTENT_TYPES

    if kind != RecommendationKind.GENERAL and not seed:
        console.print(f"[red]Error:[/red] '{kind.value}' recommendations need a seed id")
        raise typer.Exit(1)

    try:
        include = (
            frozenset(ContentType(t) for t in content_types)
            if content_types
            else ALL_CONTENT_TYPES
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    options = RecommendationOptions(
        max_results=limit,
        include_types=include,
        exclude_ids=frozenset(exclude or ()),
    )

    engine = _recommendation_engine(ctx)
    if kind == RecommendationKind.WORK:
        items = engine.get_work_recommendations(seed, options)
    elif kind == RecommendationKind.SCHOLAR:
        items = engine.get_scholar_recommendations(seed, options)
    elif kind == RecommendationKind.BIOGRAPHY:
        items = engine.get_biography_recommendations(seed, options)
    else:
        items = engine.get_general_recommendations(options)

    if not items:
        console.print("[yellow]No recommendations[/yellow]")
        return

    table = Table(title=f"Recommendations: {kind.value}" + (f" {seed}" if seed else ""))
    table.add_column("Type", style="cyan")
    table.add_column("ID", style="green", no_wrap=True)
    table.add_column("Title")
    table.add_column("Score", justify="right")
    table.add_column("Reason", style="dim")

    for item in items:
        table.add_row(
            item.content_type.value,
            item.id,
            item.title,
            f"{item.relevance_score:.2f}",
            item.reason,
        )

    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting Prouvé archive API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "prouvesearch.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from prouvesearch import __version__

    console.print(f"prouvesearch v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
