"""
Search Routes - Archive search, filter discovery and autocomplete endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from prouvesearch.config import Settings, SearchError, get_settings
from prouvesearch.domains.search import (
    AvailableFilters,
    ContentSearchEngine,
    SearchResult,
    query_errors,
)
from prouvesearch.interfaces.api.deps import get_search_engine

router = APIRouter()


class SearchRequest(BaseModel):
    """
    Search request body.

    ``term``, ``filters`` and ``sortBy`` are passed to the engine unparsed so a
    malformed query is reported as SEARCH_INVALID_QUERY rather than a schema error.
    """

    term: Any = ""
    filters: Any = Field(default_factory=dict)
    sort_by: Any = Field(default="relevance", alias="sortBy")
    page: int = Field(default=1, ge=1)
    page_size: int | None = Field(default=None, ge=1, alias="pageSize")

    model_config = {"populate_by_name": True}

    def query_payload(self) -> dict[str, Any]:
        """Raw query in the engine's wire shape."""
        return {"term": self.term, "filters": self.filters, "sortBy": self.sort_by}


class SearchResponse(BaseModel):
    """Search response."""

    query: str
    results: list[SearchResult]
    total: int
    page: int
    page_size: int
    has_next_page: bool
    has_previous_page: bool


class SuggestionsResponse(BaseModel):
    """Autocomplete response."""

    query: str
    suggestions: list[str]


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    engine: ContentSearchEngine = Depends(get_search_engine),
    settings: Settings = Depends(get_settings),
):
    """
    Search works, scholars and biography facts.

    - **term**: Free text; blank returns everything at the baseline score
    - **filters**: contentTypes, category, region, yearRange
    - **sortBy**: relevance, year, title or secondary
    - **page** / **pageSize**: 1-based paging (page size capped by configuration)
    """
    payload = request.query_payload()
    query = engine.parse_search_query(payload)
    if query is None:
        raise SearchError("Invalid search query", details={"errors": query_errors(payload)})

    page_size = min(
        request.page_size or settings.search_default_page_size,
        settings.search_max_page_size,
    )
    page = engine.search_page(query, page=request.page, page_size=page_size)

    return SearchResponse(
        query=query.term,
        results=page.items,
        total=page.total_count,
        page=page.page,
        page_size=page.page_size,
        has_next_page=page.has_next_page,
        has_previous_page=page.has_previous_page,
    )


@router.get("/filters", response_model=AvailableFilters)
async def get_filters(engine: ContentSearchEngine = Depends(get_search_engine)):
    """Filter dimensions with record counts, derived from the corpus."""
    return engine.get_available_filters()


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    q: str = Query(default="", description="Partial search term"),
    engine: ContentSearchEngine = Depends(get_search_engine),
):
    """Autocomplete suggestions for a partial term."""
    return SuggestionsResponse(query=q, suggestions=engine.get_search_suggestions(q))
