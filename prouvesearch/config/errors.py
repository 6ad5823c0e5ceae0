"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from prouvesearch.config.errors import ErrorCode, ProuveSearchError

    raise ProuveSearchError(ErrorCode.CORPUS_INVALID, "works.json is not a list")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Search errors
    SEARCH_INVALID_QUERY = "SEARCH_INVALID_QUERY"

    # Corpus errors
    CORPUS_UNAVAILABLE = "CORPUS_UNAVAILABLE"
    CORPUS_INVALID = "CORPUS_INVALID"

    # Security errors
    SECURITY_RATE_LIMITED = "SECURITY_RATE_LIMITED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ProuveSearchError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class SearchError(ProuveSearchError):
    """Search domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SEARCH_INVALID_QUERY, message, details)


class CorpusError(ProuveSearchError):
    """Content corpus loading errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.CORPUS_INVALID,
    ) -> None:
        super().__init__(code, message, details)
