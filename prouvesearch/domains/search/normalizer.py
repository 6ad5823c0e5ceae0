"""
Document Normalizer - Converts corpus records into searchable documents.

Every record type maps onto the same SearchableDocument shape: a title, named
text fields in priority order, a summary used for excerpts, and tagged metadata.
Field names here are the keys of the weight tables in scoring.py.
"""

from __future__ import annotations

import logging

from prouvesearch.domains.content.models import (
    BiographyFact,
    BiographySection,
    Scholar,
    Work,
)
from prouvesearch.domains.content.snapshot import CorpusSnapshot

from .models import (
    BiographyMetadata,
    ScholarMetadata,
    SearchableDocument,
    TextField,
    WorkMetadata,
)

logger = logging.getLogger(__name__)

__all__ = [
    "normalize_work",
    "normalize_scholar",
    "normalize_biography_fact",
    "normalize_corpus",
]


def _field(name: str, *values: str | None) -> TextField | None:
    present = tuple(v for v in values if v)
    if not present:
        return None
    return TextField(name=name, values=present)


def _fields(*candidates: TextField | None) -> tuple[TextField, ...]:
    return tuple(f for f in candidates if f is not None)


def normalize_work(work: Work) -> SearchableDocument:
    """Normalize an architectural work."""
    return SearchableDocument(
        id=work.id,
        title=work.title,
        text_fields=_fields(
            _field("title", work.title),
            _field("category", work.category.name, work.category.id),
            _field("location", work.location),
            _field("description", work.description),
        ),
        summary=work.description,
        metadata=WorkMetadata(
            year=work.year,
            category=work.category.id,
            category_name=work.category.name,
            location=work.location,
            status=work.status,
        ),
    )


def normalize_scholar(scholar: Scholar) -> SearchableDocument:
    """Normalize a scholar; each publication becomes its own field."""
    publications = [
        _field("publication", pub.title, pub.abstract, *pub.keywords)
        for pub in scholar.publications
    ]
    return SearchableDocument(
        id=scholar.id,
        title=scholar.name,
        text_fields=_fields(
            _field("name", scholar.name),
            _field("institution", scholar.institution),
            _field("specialization", *scholar.specialization),
            _field("biography", scholar.biography),
            *publications,
        ),
        summary=f"{scholar.institution}, {scholar.country} - {scholar.biography}",
        metadata=ScholarMetadata(
            name=scholar.name,
            institution=scholar.institution,
            country=scholar.country,
            region=scholar.region,
            specialization=scholar.specialization,
            publication_count=len(scholar.publications),
            publication_years=scholar.publication_years,
        ),
    )


def _biography_title(fact: BiographyFact) -> str:
    if fact.section == BiographySection.TIMELINE and fact.year is not None:
        return f"{fact.year}: {fact.title}"
    return fact.title


def _biography_summary(fact: BiographyFact) -> str:
    if fact.section == BiographySection.CAREER and fact.organization:
        lead = fact.details[0] if fact.details else fact.body
        period = f" ({fact.period})" if fact.period else ""
        return f"{fact.organization}{period} - {lead}" if lead else f"{fact.organization}{period}"
    if fact.body:
        return fact.body
    if fact.details:
        return "; ".join(fact.details)
    return fact.title


def normalize_biography_fact(fact: BiographyFact) -> SearchableDocument:
    """Normalize a biography fact or timeline entry."""
    return SearchableDocument(
        id=fact.id,
        title=_biography_title(fact),
        text_fields=_fields(
            _field("title", fact.title),
            _field("people", *fact.people),
            _field("organization", fact.organization),
            _field("place", fact.place),
            _field("body", fact.body),
            _field("details", *fact.details),
            _field("source", fact.source),
        ),
        summary=_biography_summary(fact),
        metadata=BiographyMetadata(
            section=fact.section,
            year=fact.year,
            birth_year=fact.birth_year,
            death_year=fact.death_year,
            period=fact.period,
            organization=fact.organization,
            source=fact.source,
            category=fact.category,
        ),
    )


def normalize_corpus(corpus: CorpusSnapshot) -> tuple[SearchableDocument, ...]:
    """
    Normalize the whole corpus: works, then scholars, then biography facts.

    The order is the insertion order relevance ties fall back to.
    """
    documents = (
        *(normalize_work(w) for w in corpus.works),
        *(normalize_scholar(s) for s in corpus.scholars),
        *(normalize_biography_fact(f) for f in corpus.biography),
    )
    logger.debug("Normalized %d documents", len(documents))
    return documents
