"""
Recommendation Engine - Related content by attribute similarity.

Every call follows the same shape:
1. Resolve the seed (unknown seeds yield no recommendations)
2. Drop excluded ids and the seed itself from the candidate pool
3. Score every remaining candidate of the requested types
4. Sort globally by score, descending and stable
5. Truncate to max_results
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from prouvesearch.domains.content.models import (
    BiographyFact,
    BiographySection,
    ContentType,
    Scholar,
    Work,
    region_display_name,
)
from prouvesearch.domains.content.snapshot import CorpusSnapshot
from prouvesearch.domains.search.excerpt import excerpt
from prouvesearch.domains.search.models import SearchableDocument
from prouvesearch.domains.search.normalizer import normalize_corpus

from .models import RecommendationItem, RecommendationOptions
from .rules import (
    CATEGORY_SPECIALIZATIONS,
    DEFAULT_SPECIALIZATIONS,
    SCHOLAR_WORK_RULES,
    mentions_specialization,
    specialization_display_name,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RecommendationEngine",
    "work_similarity",
    "YEAR_WINDOW",
    "DEFAULT_MAX_RESULTS",
    "GENERAL_MAX_RESULTS",
]

YEAR_WINDOW = 5
DEFAULT_MAX_RESULTS = 6
GENERAL_MAX_RESULTS = 9
FEATURED_PER_TYPE = 3


def work_similarity(seed: Work, other: Work) -> float:
    """
    Attribute similarity of two works in [0, 1].

    0.4 for the same category, up to 0.3 for year proximity (linear decay to 0 over
    YEAR_WINDOW years), 0.2 for the same location and 0.1 for the same status.
    """
    similarity = 0.0
    if seed.category.id == other.category.id:
        similarity += 0.4
    year_diff = abs(seed.year - other.year)
    if year_diff <= YEAR_WINDOW:
        similarity += 0.3 * (1 - year_diff / YEAR_WINDOW)
    if seed.location == other.location:
        similarity += 0.2
    if seed.status == other.status:
        similarity += 0.1
    return min(similarity, 1.0)


def _fact_text(fact: BiographyFact) -> str:
    return " ".join(
        part
        for part in (
            fact.title, fact.body, fact.organization, fact.place, *fact.details, *fact.people
        )
        if part
    )


def _names(specializations: Iterable[str]) -> str:
    return ", ".join(specialization_display_name(s) for s in specializations)


class RecommendationEngine:
    """
    Related-content recommender over an immutable corpus snapshot.

    Example:
        >>> engine = RecommendationEngine(corpus)
        >>> items = engine.get_work_recommendations(
        ...     "maison-tropicale", RecommendationOptions(max_results=3)
        ... )
    """

    def __init__(self, corpus: CorpusSnapshot, excerpt_length: int = 120) -> None:
        """
        Initialize recommendation engine.

        Args:
            corpus: Corpus snapshot to recommend from
            excerpt_length: Maximum excerpt length before the ellipsis
        """
        self._corpus = corpus
        self._excerpt_length = excerpt_length
        self._documents: dict[tuple[ContentType, str], SearchableDocument] = {
            (doc.content_type, doc.id): doc for doc in normalize_corpus(corpus)
        }

    # --- Seeds ---

    def get_work_recommendations(
        self,
        work_id: str,
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """
        Works, scholars and biography facts related to a work.

        Args:
            work_id: Seed work ID
            options: Result limits, type selection and exclusions

        Returns:
            Ranked items; empty when the work is unknown
        """
        options = options or RecommendationOptions()
        work = self._corpus.get_work(work_id)
        if work is None:
            logger.debug("Work recommendations: unknown work '%s'", work_id)
            return []

        excluded = options.exclude_ids | {work.id}
        candidates: list[RecommendationItem] = []
        if ContentType.WORK in options.include_types:
            candidates.extend(self._works_related_to_work(work, excluded))
        if ContentType.SCHOLAR in options.include_types:
            candidates.extend(self._scholars_related_to_work(work, excluded))
        if ContentType.BIOGRAPHY in options.include_types:
            candidates.extend(self._facts_related_to_work(work, excluded))

        return self._rank(candidates, options, DEFAULT_MAX_RESULTS, seed=work.id)

    def get_scholar_recommendations(
        self,
        scholar_id: str,
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """
        Works, scholars and biography facts related to a scholar.

        Args:
            scholar_id: Seed scholar ID
            options: Result limits, type selection and exclusions

        Returns:
            Ranked items; empty when the scholar is unknown
        """
        options = options or RecommendationOptions()
        scholar = self._corpus.get_scholar(scholar_id)
        if scholar is None:
            logger.debug("Scholar recommendations: unknown scholar '%s'", scholar_id)
            return []

        excluded = options.exclude_ids | {scholar.id}
        candidates: list[RecommendationItem] = []
        if ContentType.WORK in options.include_types:
            candidates.extend(self._works_related_to_scholar(scholar, excluded))
        if ContentType.SCHOLAR in options.include_types:
            candidates.extend(self._scholars_related_to_scholar(scholar, excluded))
        if ContentType.BIOGRAPHY in options.include_types:
            candidates.extend(self._facts_related_to_scholar(scholar, excluded))

        return self._rank(candidates, options, DEFAULT_MAX_RESULTS, seed=scholar.id)

    def get_biography_recommendations(
        self,
        section: BiographySection | str,
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """
        Works and scholars related to a biography section.

        Sections other than career, philosophy and collaboration (including unknown
        names) get works in corpus order.
        """
        options = options or RecommendationOptions()
        section_name = section.value if isinstance(section, BiographySection) else str(section)
        excluded = options.exclude_ids

        candidates: list[RecommendationItem] = []
        if ContentType.WORK in options.include_types:
            candidates.extend(self._works_for_section(section_name, excluded))
        if ContentType.SCHOLAR in options.include_types:
            for scholar in self._available(self._corpus.scholars, excluded):
                if "architecturalHistory" in scholar.specialization:
                    reason = "Architectural history expert"
                    candidates.append(self._item(ContentType.SCHOLAR, scholar.id, 0.6, reason))

        return self._rank(
            candidates, options, DEFAULT_MAX_RESULTS, seed=f"section:{section_name}"
        )

    def get_general_recommendations(
        self,
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """
        Featured content for landing pages.

        The three newest works (0.9), the three most-published scholars (0.8), the
        biography overview (0.7), the first philosophy statement (0.6) and the first
        collaboration (0.5).
        """
        options = options or RecommendationOptions()
        excluded = options.exclude_ids
        corpus = self._corpus

        candidates: list[RecommendationItem] = []
        if ContentType.WORK in options.include_types:
            newest = sorted(self._available(corpus.works, excluded), key=lambda w: -w.year)
            for work in newest[:FEATURED_PER_TYPE]:
                candidates.append(self._item(ContentType.WORK, work.id, 0.9, "Featured work"))
        if ContentType.SCHOLAR in options.include_types:
            published = sorted(
                self._available(corpus.scholars, excluded),
                key=lambda s: -len(s.publications),
            )
            for scholar in published[:FEATURED_PER_TYPE]:
                candidates.append(
                    self._item(ContentType.SCHOLAR, scholar.id, 0.8, "Widely published scholar")
                )
        if ContentType.BIOGRAPHY in options.include_types:
            highlights = (
                (BiographySection.OVERVIEW, 0.7, "Biography highlights"),
                (BiographySection.PHILOSOPHY, 0.6, "Core design philosophy"),
                (BiographySection.COLLABORATION, 0.5, "Key collaboration"),
            )
            for section, score, reason in highlights:
                facts = list(self._available(corpus.biography_section(section), excluded))
                if facts:
                    item = self._item(ContentType.BIOGRAPHY, facts[0].id, score, reason)
                    candidates.append(item)

        return self._rank(candidates, options, GENERAL_MAX_RESULTS, seed="general")

    def get_trending_content(
        self,
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """Trending content; featured content until view analytics exist."""
        return self.get_general_recommendations(options)

    def get_personalized_recommendations(
        self,
        view_history: Iterable[str],
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """Featured content excluding everything in ``view_history``."""
        options = (options or RecommendationOptions()).excluding(list(view_history))
        return self.get_general_recommendations(options)

    # --- Candidate scoring ---

    def _works_related_to_work(
        self, seed: Work, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        for other in self._available(self._corpus.works, excluded):
            same_category = other.category.id == seed.category.id
            if not same_category and abs(other.year - seed.year) > YEAR_WINDOW:
                continue
            score = work_similarity(seed, other)
            if score <= 0.0:
                continue
            reason = (
                f"Same category: {seed.category.name}"
                if same_category
                else f"Same period: {other.year}"
            )
            yield self._item(ContentType.WORK, other.id, score, reason)

    def _scholars_related_to_work(
        self, seed: Work, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        relevant = CATEGORY_SPECIALIZATIONS.get(seed.category.id, DEFAULT_SPECIALIZATIONS)
        for scholar in self._available(self._corpus.scholars, excluded):
            overlap = [spec for spec in scholar.specialization if spec in relevant]
            if not overlap:
                continue
            score = min(0.5 + 0.2 * len(overlap), 1.0)
            yield self._item(
                ContentType.SCHOLAR, scholar.id, score, f"Researches {_names(overlap)}"
            )

    def _facts_related_to_work(
        self, seed: Work, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        rules = (
            (BiographySection.CAREER, 0.8, "Career period"),
            (BiographySection.COLLABORATION, 0.6, "Collaboration period"),
        )
        for section, score, label in rules:
            for fact in self._available(self._corpus.biography_section(section), excluded):
                if fact.covers_year(seed.year):
                    period = fact.period or str(fact.year)
                    yield self._item(ContentType.BIOGRAPHY, fact.id, score, f"{label}: {period}")

    def _works_related_to_scholar(
        self, seed: Scholar, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        rules = [
            (spec, SCHOLAR_WORK_RULES[spec])
            for spec in seed.specialization
            if spec in SCHOLAR_WORK_RULES
        ]
        for work in self._available(self._corpus.works, excluded):
            matching = [spec for spec, rule in rules if rule.matches(work)]
            if not matching:
                continue
            score = min(0.6 + 0.1 * len(matching), 1.0)
            yield self._item(
                ContentType.WORK, work.id, score, f"Related to {_names(matching)} research"
            )

    def _scholars_related_to_scholar(
        self, seed: Scholar, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        for other in self._available(self._corpus.scholars, excluded):
            same_region = other.region == seed.region
            shared = [spec for spec in other.specialization if spec in seed.specialization]
            if same_region and shared:
                score = 0.8
                region = region_display_name(seed.region)
                reason = f"Same region ({region}) and shared {_names(shared)}"
            elif same_region:
                score = 0.7
                reason = f"Same region: {region_display_name(seed.region)}"
            elif shared:
                score = 0.6
                reason = f"Shared specialization: {_names(shared)}"
            else:
                continue
            yield self._item(ContentType.SCHOLAR, other.id, score, reason)

    def _facts_related_to_scholar(
        self, seed: Scholar, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        rules = (
            (BiographySection.COLLABORATION, 0.7, "Collaboration related to"),
            (BiographySection.PHILOSOPHY, 0.5, "Design philosophy related to"),
        )
        for section, score, label in rules:
            for fact in self._available(self._corpus.biography_section(section), excluded):
                mentioned = mentions_specialization(_fact_text(fact), seed.specialization)
                if mentioned:
                    yield self._item(
                        ContentType.BIOGRAPHY, fact.id, score, f"{label} {_names(mentioned)}"
                    )

    def _works_for_section(
        self, section: str, excluded: frozenset[str]
    ) -> Iterator[RecommendationItem]:
        works = list(self._available(self._corpus.works, excluded))
        if section == BiographySection.CAREER.value:
            for work in sorted(works, key=lambda w: w.year):
                reason = f"Built during his career ({work.year})"
                yield self._item(ContentType.WORK, work.id, 0.8, reason)
        elif section == BiographySection.PHILOSOPHY.value:
            for work in works:
                if work.category.id in ("experimental", "residential"):
                    reason = "Exemplifies his design philosophy"
                    yield self._item(ContentType.WORK, work.id, 0.8, reason)
        elif section == BiographySection.COLLABORATION.value:
            for work in works:
                if 1945 <= work.year <= 1960:
                    yield self._item(
                        ContentType.WORK, work.id, 0.8, "From his collaborative period (1945-1960)"
                    )
        else:
            for work in works:
                yield self._item(ContentType.WORK, work.id, 0.8, "Representative work")

    # --- Helpers ---

    @staticmethod
    def _available(records, excluded: frozenset[str]):
        return (record for record in records if record.id not in excluded)

    def _item(
        self,
        content_type: ContentType,
        record_id: str,
        score: float,
        reason: str,
    ) -> RecommendationItem:
        document = self._documents[(content_type, record_id)]
        return RecommendationItem(
            id=document.id,
            content_type=content_type,
            title=document.title,
            excerpt=excerpt(document.summary, self._excerpt_length),
            relevance_score=score,
            reason=reason,
            metadata=document.metadata.model_dump(mode="json", exclude={"content_type"}),
        )

    def _rank(
        self,
        candidates: list[RecommendationItem],
        options: RecommendationOptions,
        default_max: int,
        seed: str,
    ) -> list[RecommendationItem]:
        limit = options.max_results if options.max_results is not None else default_max
        ranked = sorted(candidates, key=lambda item: -item.relevance_score)[:limit]
        logger.info(
            "Recommendations for %s: %d candidates -> %d items",
            seed,
            len(candidates),
            len(ranked),
        )
        return ranked
