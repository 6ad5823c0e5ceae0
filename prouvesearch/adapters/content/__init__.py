"""Content corpus repositories."""

from .repository import BUNDLED_DATA_DIR, InMemoryContentRepository, JSONContentRepository

__all__ = ["BUNDLED_DATA_DIR", "JSONContentRepository", "InMemoryContentRepository"]
