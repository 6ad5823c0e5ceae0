"""
Content Models - Read-only records of the archive corpus.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field


class ContentType(str, Enum):
    """Record types the engine can search and recommend."""

    WORK = "work"
    SCHOLAR = "scholar"
    BIOGRAPHY = "biography"


class WorkStatus(str, Enum):
    """Preservation status of an architectural work."""

    EXISTING = "existing"
    DEMOLISHED = "demolished"
    RECONSTRUCTED = "reconstructed"


class PublicationType(str, Enum):
    """Kinds of scholarly publication."""

    BOOK = "book"
    ARTICLE = "article"
    THESIS = "thesis"
    CONFERENCE = "conference"


class BiographySection(str, Enum):
    """Sections a biography fact belongs to."""

    OVERVIEW = "overview"
    PERSONAL = "personal"
    EDUCATION = "education"
    CAREER = "career"
    PHILOSOPHY = "philosophy"
    COLLABORATION = "collaboration"
    LEGACY = "legacy"
    TIMELINE = "timeline"


REGION_NAMES: dict[str, str] = {
    "europe": "Europe",
    "northAmerica": "North America",
    "asia": "Asia",
    "africa": "Africa",
    "oceania": "Oceania",
    "southAmerica": "South America",
}


def region_display_name(region_id: str) -> str:
    """Human-readable name for a region id, falling back to the id itself."""
    return REGION_NAMES.get(region_id, region_id)


class WorkCategory(BaseModel):
    """Category an architectural work is filed under."""

    id: str
    name: str
    description: str = ""

    model_config = {"frozen": True}


class Work(BaseModel):
    """Architectural work."""

    id: str
    title: str
    year: int
    location: str
    category: WorkCategory
    description: str
    status: WorkStatus = WorkStatus.EXISTING

    model_config = {"frozen": True}


class ContactInfo(BaseModel):
    """Scholar contact details. Every field may be absent."""

    email: str | None = None
    phone: str | None = None
    website: str | None = None
    address: str | None = None

    model_config = {"frozen": True}


class Publication(BaseModel):
    """Scholarly publication."""

    id: str
    title: str
    type: PublicationType
    year: int
    publisher: str | None = None
    abstract: str = ""
    keywords: tuple[str, ...] = ()
    url: str | None = None

    model_config = {"frozen": True}


class Exhibition(BaseModel):
    """Exhibition a scholar took part in."""

    id: str
    title: str
    venue: str
    year: int
    description: str = ""
    role: str = ""

    model_config = {"frozen": True}


class Scholar(BaseModel):
    """Researcher working on the archive's subject."""

    id: str
    name: str
    institution: str
    country: str
    region: str
    specialization: tuple[str, ...] = ()
    biography: str = ""
    contact: ContactInfo = Field(default_factory=ContactInfo)
    publications: tuple[Publication, ...] = ()
    exhibitions: tuple[Exhibition, ...] = ()

    model_config = {"frozen": True}

    @property
    def publication_years(self) -> tuple[int, ...]:
        """Years of every publication, in listing order."""
        return tuple(pub.year for pub in self.publications)


_PERIOD_YEAR = re.compile(r"\d{4}")


class BiographyFact(BaseModel):
    """
    One entry of the biography: personal info, an education record, a career
    milestone, a philosophy statement, a collaboration, a legacy item, a timeline
    event or the overview.
    """

    id: str
    section: BiographySection
    title: str
    body: str = ""
    details: tuple[str, ...] = ()
    year: int | None = None
    period: str | None = None
    place: str | None = None
    organization: str | None = None
    people: tuple[str, ...] = ()
    source: str | None = None
    category: str | None = None
    birth_year: int | None = None
    death_year: int | None = None

    model_config = {"frozen": True}

    def period_bounds(self) -> tuple[int, int] | None:
        """
        Parse ``period`` into an inclusive year span.

        "1930-1954" -> (1930, 1954), "1920" -> (1920, 1920), no years -> None.
        """
        if self.period is None:
            return None
        years = [int(match) for match in _PERIOD_YEAR.findall(self.period)]
        if not years:
            return None
        return min(years), max(years)

    def covers_year(self, year: int) -> bool:
        """Whether the fact's period contains ``year``."""
        bounds = self.period_bounds()
        if bounds is None:
            return self.year == year
        return bounds[0] <= year <= bounds[1]
