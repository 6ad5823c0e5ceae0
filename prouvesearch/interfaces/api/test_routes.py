"""Tests for API Routes."""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from prouvesearch.config import CorpusError, ErrorCode, Settings, get_settings
from prouvesearch.domains.content import (
    BiographyFact,
    BiographySection,
    CorpusSnapshot,
    Publication,
    PublicationType,
    Scholar,
    Work,
    WorkCategory,
    WorkStatus,
)
from prouvesearch.domains.recommendation import RecommendationEngine
from prouvesearch.domains.search import ContentSearchEngine

from .deps import get_recommendation_engine, get_search_engine
from .main import create_app
from .middleware import ERROR_STATUS, RateLimitMiddleware, SlidingWindowLimiter

RESIDENTIAL = WorkCategory(id="residential", name="Residential")

CORPUS = CorpusSnapshot(
    works=(
        Work(
            id="maison-tropicale",
            title="Maison Tropicale",
            year=1949,
            location="Niamey, Niger",
            category=RESIDENTIAL,
            description="Prefabricated aluminium house for tropical climates.",
            status=WorkStatus.RECONSTRUCTED,
        ),
        Work(
            id="maisons-de-meudon",
            title="Maisons de Meudon",
            year=1950,
            location="Meudon, France",
            category=RESIDENTIAL,
            description="Demountable steel houses on a hillside.",
        ),
    ),
    scholars=(
        Scholar(
            id="catherine-coley",
            name="Catherine Coley",
            institution="École d'architecture de Nancy",
            country="France",
            region="europe",
            specialization=("architecturalHistory", "prefabricatedConstruction"),
            publications=(
                Publication(
                    id="coley-1",
                    title="Jean Prouvé en son temps",
                    type=PublicationType.BOOK,
                    year=2010,
                ),
            ),
        ),
    ),
    biography=(
        BiographyFact(
            id="biography-overview",
            section=BiographySection.OVERVIEW,
            title="Jean Prouvé",
            body="Constructor and designer.",
            birth_year=1901,
            death_year=1984,
        ),
        BiographyFact(
            id="biography-career-0",
            section=BiographySection.CAREER,
            title="Ateliers Jean Prouvé",
            organization="Ateliers Jean Prouvé",
            period="1931-1954",
        ),
    ),
)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client backed by the fixture corpus."""
    app = create_app()

    search_engine = ContentSearchEngine(CORPUS)
    recommendation_engine = RecommendationEngine(CORPUS)
    app.dependency_overrides[get_search_engine] = lambda: search_engine
    app.dependency_overrides[get_recommendation_engine] = lambda: recommendation_engine
    app.dependency_overrides[get_settings] = lambda: Settings(
        search_default_page_size=2, search_max_page_size=3
    )

    yield TestClient(app)

    app.dependency_overrides.clear()


def _ids(data: dict, key: str) -> list[str]:
    return [item["id"] for item in data[key]]


# --- Health Tests ---


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "prouvesearch"


def test_api_info_endpoint(client: TestClient) -> None:
    """Test API info endpoint."""
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"


def test_request_id_echoed(client: TestClient) -> None:
    """Test the request ID header is propagated to the response."""
    response = client.get("/api", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Response-Time-Ms" in response.headers


# --- Search Tests ---


def test_search_by_term(client: TestClient) -> None:
    """Test a term matching one work's title and description."""
    response = client.post("/api/search", json={"term": "tropical"})
    assert response.status_code == 200

    data = response.json()
    assert data["query"] == "tropical"
    assert data["total"] == 1
    assert _ids(data, "results") == ["maison-tropicale"]
    result = data["results"][0]
    assert result["relevance_score"] == 1.0
    assert result["content_type"] == "work"
    assert result["metadata"]["year"] == 1949


def test_search_filters_and_sort(client: TestClient) -> None:
    """Test a blank term with a type filter sorted by year."""
    response = client.post(
        "/api/search",
        json={"term": "", "filters": {"contentTypes": ["work"]}, "sortBy": "year"},
    )
    assert response.status_code == 200
    assert _ids(response.json(), "results") == ["maisons-de-meudon", "maison-tropicale"]


def test_search_pagination(client: TestClient) -> None:
    """Test paging through a blank-term search ordered by year."""
    response = client.post("/api/search", json={"term": "", "page": 2, "pageSize": 2})
    assert response.status_code == 200

    data = response.json()
    assert data["total"] == 5
    assert _ids(data, "results") == ["maison-tropicale", "biography-overview"]
    assert data["has_next_page"] is True
    assert data["has_previous_page"] is True


def test_search_page_size_defaults_and_cap(client: TestClient) -> None:
    """Test page size falls back to the default and is capped by the maximum."""
    default = client.post("/api/search", json={}).json()
    assert default["page_size"] == 2
    assert len(default["results"]) == 2

    capped = client.post("/api/search", json={"pageSize": 50}).json()
    assert capped["page_size"] == 3
    assert len(capped["results"]) == 3


@pytest.mark.parametrize(
    "body",
    [
        {"term": 42},
        {"term": None},
        {"term": "maison", "sortBy": "bogus"},
        {"term": "maison", "filters": {"yearRange": [1960, 1950]}},
        {"term": "maison", "filters": "everything"},
    ],
)
def test_search_invalid_query(client: TestClient, body: dict) -> None:
    """Test invalid queries are rejected with the search error code."""
    response = client.post("/api/search", json=body, headers={"X-Request-ID": "bad-query"})
    assert response.status_code == 400

    data = response.json()
    assert data["error"]["code"] == ErrorCode.SEARCH_INVALID_QUERY.value
    assert data["error"]["details"]["errors"]
    assert data["request_id"] == "bad-query"


def test_search_invalid_page(client: TestClient) -> None:
    """Test page numbers below one fail request validation."""
    response = client.post("/api/search", json={"page": 0})
    assert response.status_code == 422


def test_available_filters(client: TestClient) -> None:
    """Test filter dimensions are derived from the corpus."""
    response = client.get("/api/search/filters")
    assert response.status_code == 200

    data = response.json()
    counts = {option["id"]: option["count"] for option in data["types"]}
    assert counts == {"work": 2, "scholar": 1, "biography": 2}
    assert data["categories"] == [{"id": "residential", "name": "Residential", "count": 2}]
    assert [option["id"] for option in data["regions"]] == ["europe"]
    assert data["year_range"] == [1901, 2010]


def test_suggestions(client: TestClient) -> None:
    """Test autocomplete over work titles."""
    response = client.get("/api/search/suggestions", params={"q": "mai"})
    assert response.status_code == 200
    assert response.json() == {
        "query": "mai",
        "suggestions": ["Maison Tropicale", "Maisons de Meudon"],
    }


def test_suggestions_below_min_length(client: TestClient) -> None:
    """Test single characters produce no suggestions."""
    response = client.get("/api/search/suggestions", params={"q": "m"})
    assert response.json()["suggestions"] == []


def test_corpus_unavailable(client: TestClient) -> None:
    """Test corpus loading failures surface as 503 with the corpus error code."""

    def broken_engine() -> ContentSearchEngine:
        raise CorpusError("Corpus file unavailable", code=ErrorCode.CORPUS_UNAVAILABLE)

    client.app.dependency_overrides[get_search_engine] = broken_engine
    response = client.get("/api/search/filters")
    assert response.status_code == 503
    assert response.json()["error"]["code"] == ErrorCode.CORPUS_UNAVAILABLE.value


# --- Recommendation Tests ---


def test_general_recommendations(client: TestClient) -> None:
    """Test featured content ordering."""
    response = client.get("/api/recommendations")
    assert response.status_code == 200

    data = response.json()
    assert _ids(data, "items") == [
        "maisons-de-meudon",
        "maison-tropicale",
        "catherine-coley",
        "biography-overview",
    ]
    assert data["total"] == 4
    assert data["items"][0]["reason"] == "Featured work"


def test_general_recommendations_options(client: TestClient) -> None:
    """Test include_types and exclude_ids query parameters."""
    response = client.get(
        "/api/recommendations",
        params={"include_types": ["work", "scholar"], "exclude_ids": ["maison-tropicale"]},
    )
    assert _ids(response.json(), "items") == ["maisons-de-meudon", "catherine-coley"]

    limited = client.get("/api/recommendations", params={"max_results": 1})
    assert _ids(limited.json(), "items") == ["maisons-de-meudon"]


def test_trending_content(client: TestClient) -> None:
    """Test trending content matches featured content."""
    trending = client.get("/api/recommendations/trending").json()
    general = client.get("/api/recommendations").json()
    assert trending == general


def test_personalized_recommendations(client: TestClient) -> None:
    """Test viewed records are left out."""
    response = client.get(
        "/api/recommendations/personalized",
        params={"history": ["maisons-de-meudon", "biography-overview"]},
    )
    assert _ids(response.json(), "items") == ["maison-tropicale", "catherine-coley"]


def test_work_recommendations(client: TestClient) -> None:
    """Test related scholars, career facts and works for a work."""
    response = client.get("/api/recommendations/works/maison-tropicale")
    assert response.status_code == 200

    items = response.json()["items"]
    assert [item["id"] for item in items] == [
        "catherine-coley",
        "biography-career-0",
        "maisons-de-meudon",
    ]
    assert items[1]["reason"] == "Career period: 1931-1954"
    assert items[2]["reason"] == "Same category: Residential"


def test_work_recommendations_unknown_seed(client: TestClient) -> None:
    """Test an unknown work yields an empty list."""
    response = client.get("/api/recommendations/works/does-not-exist")
    assert response.status_code == 200
    assert response.json() == {"items": [], "total": 0}


def test_scholar_recommendations(client: TestClient) -> None:
    """Test works matching a scholar's specializations."""
    response = client.get("/api/recommendations/scholars/catherine-coley")
    assert _ids(response.json(), "items") == ["maison-tropicale", "maisons-de-meudon"]


def test_biography_recommendations(client: TestClient) -> None:
    """Test career section recommendations."""
    response = client.get("/api/recommendations/biography/career")
    items = response.json()["items"]
    assert [item["id"] for item in items] == [
        "maison-tropicale",
        "maisons-de-meudon",
        "catherine-coley",
    ]
    assert items[-1]["reason"] == "Architectural history expert"


@pytest.mark.parametrize(
    "params",
    [{"max_results": 0}, {"include_types": ["video"]}],
)
def test_recommendation_invalid_options(client: TestClient, params: dict) -> None:
    """Test malformed options fail request validation."""
    response = client.get("/api/recommendations", params=params)
    assert response.status_code == 422


# --- Middleware Tests ---


def test_rate_limit() -> None:
    """Test requests beyond the per-minute allowance are rejected."""
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, requests_per_minute=2)

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    client = TestClient(app)
    assert client.get("/ping").headers["X-RateLimit-Remaining"] == "1"
    assert client.get("/ping").status_code == 200

    response = client.get("/ping")
    assert response.status_code == 429
    assert response.headers["Retry-After"] == "60"
    assert response.json()["error"]["code"] == ErrorCode.SECURITY_RATE_LIMITED.value

    assert client.get("/health").status_code == 200


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_limiter_blocks_until_oldest_request_expires() -> None:
    """Test a full window reports the wait until its oldest request leaves."""
    clock = FakeClock()
    limiter = SlidingWindowLimiter(limit=2, window_seconds=60, clock=clock)

    assert limiter.acquire("a") == 0.0
    clock.now += 10
    assert limiter.acquire("a") == 0.0
    assert limiter.remaining("a") == 0

    clock.now += 5
    assert limiter.acquire("a") == pytest.approx(45.0)
    assert limiter.acquire("b") == 0.0

    clock.now += 45
    assert limiter.acquire("a") == 0.0
    assert limiter.remaining("a") == 0


def test_limiter_evicts_idle_clients() -> None:
    """Test clients idle for a whole window stop holding state."""
    clock = FakeClock()
    limiter = SlidingWindowLimiter(limit=5, window_seconds=60, clock=clock)
    for client in ("a", "b", "c"):
        limiter.acquire(client)
    assert limiter.tracked_clients == 3

    clock.now += 30
    limiter.acquire("c")
    clock.now += 31
    limiter.acquire("d")
    assert limiter.tracked_clients == 2
    assert limiter.remaining("a") == 5

    clock.now += 120
    assert limiter.sweep() == 2
    assert limiter.tracked_clients == 0


@pytest.mark.parametrize("kwargs", [{"limit": 0}, {"limit": 1, "window_seconds": 0}])
def test_limiter_rejects_invalid_settings(kwargs: dict) -> None:
    """Test the limit and window must be positive."""
    with pytest.raises(ValueError):
        SlidingWindowLimiter(**kwargs)


def test_unhandled_error_is_internal() -> None:
    """Test unexpected exceptions become 500 responses with the internal code."""
    from .middleware import ErrorHandlerMiddleware, RequestContextMiddleware

    app = FastAPI()
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestContextMiddleware)

    @app.get("/boom")
    async def boom() -> dict[str, str]:
        raise RuntimeError("boom")

    response = TestClient(app).get("/boom", headers={"X-Request-ID": "req-500"})
    assert response.status_code == 500
    assert response.json()["error"]["code"] == ErrorCode.INTERNAL_ERROR.value
    assert response.json()["request_id"] == "req-500"
    assert response.headers["X-Request-ID"] == "req-500"


def test_error_codes_map_to_status() -> None:
    """Test every error code has a response status and codes stay limited to raised ones."""
    statuses = {code.value: ERROR_STATUS.get(code, 500) for code in ErrorCode}
    assert statuses == {
        "SEARCH_INVALID_QUERY": 400,
        "CORPUS_UNAVAILABLE": 503,
        "CORPUS_INVALID": 500,
        "SECURITY_RATE_LIMITED": 429,
        "INTERNAL_ERROR": 500,
    }
