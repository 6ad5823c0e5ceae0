"""
Recommendation Rules - Fixed relevance tables linking categories, specializations and text.

CATEGORY_SPECIALIZATIONS
    Scholar specializations relevant to each work category. Categories not
    listed fall back to DEFAULT_SPECIALIZATIONS.

SCHOLAR_WORK_RULES
    Which works a scholar specialization points to: a category set, a year span,
    or (architectural history) every work.

SPECIALIZATION_KEYWORDS
    Lowercase fragments looked up in biography text, in French/English and Chinese.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from prouvesearch.domains.content.models import Work

__all__ = [
    "DEFAULT_SPECIALIZATIONS",
    "CATEGORY_SPECIALIZATIONS",
    "WorkRule",
    "SCHOLAR_WORK_RULES",
    "SPECIALIZATION_KEYWORDS",
    "SPECIALIZATION_NAMES",
    "specialization_display_name",
    "mentions_specialization",
]

DEFAULT_SPECIALIZATIONS: frozenset[str] = frozenset(
    {"architecturalHistory", "prefabricatedConstruction"}
)

CATEGORY_SPECIALIZATIONS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "residential": DEFAULT_SPECIALIZATIONS | {"modernism"},
        "industrial": DEFAULT_SPECIALIZATIONS | {"industrialDesign", "materialStudies"},
        "educational": DEFAULT_SPECIALIZATIONS,
        "experimental": DEFAULT_SPECIALIZATIONS | {"industrialDesign", "materialStudies"},
        "furniture": frozenset({"industrialDesign", "materialStudies", "modernism"}),
    }
)


@dataclass(frozen=True)
class WorkRule:
    """Predicate over works; an empty rule matches every work."""

    categories: frozenset[str] | None = None
    years: tuple[int, int] | None = None

    def matches(self, work: Work) -> bool:
        if self.categories is not None and work.category.id not in self.categories:
            return False
        if self.years is not None and not self.years[0] <= work.year <= self.years[1]:
            return False
        return True


SCHOLAR_WORK_RULES: Mapping[str, WorkRule] = MappingProxyType(
    {
        "prefabricatedConstruction": WorkRule(categories=frozenset({"residential", "industrial"})),
        "industrialDesign": WorkRule(categories=frozenset({"industrial", "experimental"})),
        "modernism": WorkRule(years=(1930, 1960)),
        "architecturalHistory": WorkRule(),
    }
)

SPECIALIZATION_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "prefabricatedConstruction": ("prefabricat", "préfabri", "预制", "装配"),
        "industrialDesign": ("industrial", "industriel", "工业"),
        "modernism": ("modern", "现代"),
        "architecturalHistory": ("history", "histoire", "建筑史", "历史"),
        "materialStudies": ("material", "matériau", "aluminium", "材料", "铝", "钢"),
    }
)

SPECIALIZATION_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "prefabricatedConstruction": "prefabricated construction",
        "industrialDesign": "industrial design",
        "modernism": "modernism",
        "architecturalHistory": "architectural history",
        "materialStudies": "material studies",
    }
)


def specialization_display_name(specialization: str) -> str:
    """Readable name of a specialization id, falling back to the id."""
    return SPECIALIZATION_NAMES.get(specialization, specialization)


def mentions_specialization(text: str, specializations: Iterable[str]) -> list[str]:
    """Specializations (in the given order) with a keyword occurring in ``text``."""
    haystack = text.casefold()
    found = []
    for spec in specializations:
        keywords = SPECIALIZATION_KEYWORDS.get(spec, (spec.casefold(),))
        if any(keyword in haystack for keyword in keywords):
            found.append(spec)
    return found
