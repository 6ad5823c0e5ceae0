"""
Content Contracts - Interfaces for content repositories.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import BiographyFact, Scholar, Work


@runtime_checkable
class ContentRepository(Protocol):
    """Contract for read-only enumeration of the archive corpus."""

    def list_works(self) -> list[Work]:
        """Enumerate architectural works."""
        ...

    def list_scholars(self) -> list[Scholar]:
        """Enumerate scholars."""
        ...

    def list_biography_facts(self) -> list[BiographyFact]:
        """Enumerate biography facts and timeline entries."""
        ...
