"""
Search Models - Data types for search domain.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    AllowInfNan,
    BaseModel,
    Field,
    Strict,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from prouvesearch.domains.content.models import BiographySection, ContentType, WorkStatus


class SortOption(str, Enum):
    """Result orderings."""

    RELEVANCE = "relevance"
    YEAR = "year"
    TITLE = "title"
    SECONDARY = "secondary"


# Legacy wire value for SortOption.SECONDARY
_SORT_ALIASES = {"author": SortOption.SECONDARY.value}


# --- Normalized documents ---


class TextField(BaseModel):
    """Named searchable field; a field hits when any of its values contains the term."""

    name: str
    values: tuple[str, ...]

    model_config = {"frozen": True}

    def matches(self, needle: str) -> bool:
        """Case-insensitive containment; ``needle`` must already be casefolded."""
        return any(needle in value.casefold() for value in self.values)


class WorkMetadata(BaseModel):
    """Attributes of a work document."""

    content_type: Literal[ContentType.WORK] = ContentType.WORK
    year: int
    category: str
    category_name: str
    location: str
    status: WorkStatus

    model_config = {"frozen": True}


class ScholarMetadata(BaseModel):
    """Attributes of a scholar document."""

    content_type: Literal[ContentType.SCHOLAR] = ContentType.SCHOLAR
    name: str
    institution: str
    country: str
    region: str
    specialization: tuple[str, ...] = ()
    publication_count: int = 0
    publication_years: tuple[int, ...] = ()

    model_config = {"frozen": True}


class BiographyMetadata(BaseModel):
    """Attributes of a biography document."""

    content_type: Literal[ContentType.BIOGRAPHY] = ContentType.BIOGRAPHY
    section: BiographySection
    year: int | None = None
    birth_year: int | None = None
    death_year: int | None = None
    period: str | None = None
    organization: str | None = None
    source: str | None = None
    category: str | None = None

    model_config = {"frozen": True}


DocumentMetadata = Annotated[
    WorkMetadata | ScholarMetadata | BiographyMetadata,
    Field(discriminator="content_type"),
]


class SearchableDocument(BaseModel):
    """Normalized, searchable representation of one corpus record."""

    id: str
    title: str
    text_fields: tuple[TextField, ...]
    summary: str
    metadata: DocumentMetadata

    model_config = {"frozen": True}

    @property
    def content_type(self) -> ContentType:
        """Record type, read from the metadata tag."""
        return self.metadata.content_type


class ScoredDocument(BaseModel):
    """Document paired with its relevance score for one query."""

    document: SearchableDocument
    score: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}


# --- Queries ---

# Integral or finite float year; booleans and numeric strings are rejected
YearBound = StrictInt | Annotated[float, Strict(), AllowInfNan(False)]


class SearchFilters(BaseModel):
    """Attribute predicates; absent or empty dimensions are no-ops."""

    content_types: frozenset[ContentType] | None = Field(
        default=None,
        validation_alias=AliasChoices("content_types", "contentTypes", "type", "types"),
    )
    category: frozenset[StrictStr] | None = None
    region: frozenset[StrictStr] | None = None
    year_range: tuple[YearBound, YearBound] | None = Field(
        default=None,
        validation_alias=AliasChoices("year_range", "yearRange", "year"),
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("year_range", mode="before")
    @classmethod
    def _reject_boolean_years(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)) and any(isinstance(v, bool) for v in value):
            raise ValueError("year_range bounds must be numbers")
        return value

    @model_validator(mode="after")
    def _check_year_range(self) -> SearchFilters:
        if self.year_range is not None and self.year_range[0] > self.year_range[1]:
            raise ValueError("year_range minimum must not exceed maximum")
        return self


class SearchQuery(BaseModel):
    """Search request."""

    term: StrictStr = ""
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort_by: SortOption = SortOption.RELEVANCE

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    @field_validator("sort_by", mode="before")
    @classmethod
    def _legacy_sort_values(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SORT_ALIASES.get(value, value)
        return value

    @property
    def normalized_term(self) -> str:
        """Casefolded term, empty when the term is blank."""
        return self.term.strip().casefold()


# --- Results ---


class SearchResult(BaseModel):
    """Single search result."""

    id: str
    content_type: ContentType
    title: str
    excerpt: str
    relevance_score: float = Field(ge=0.0, le=1.0)
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchPage(BaseModel):
    """One page of search results."""

    items: list[SearchResult]
    total_count: int
    page: int
    page_size: int
    has_next_page: bool
    has_previous_page: bool


class FilterOption(BaseModel):
    """Value of a filter dimension with the number of records carrying it."""

    id: str
    name: str
    count: int


class AvailableFilters(BaseModel):
    """Filter dimensions aggregated from the live corpus."""

    types: list[FilterOption]
    categories: list[FilterOption]
    regions: list[FilterOption]
    year_range: tuple[int, int] | None = None
