"""
Adapters - Data source integrations.

Corpus access is wrapped here to isolate domains from storage formats.
"""

from .content import InMemoryContentRepository, JSONContentRepository

__all__ = [
    "JSONContentRepository",
    "InMemoryContentRepository",
]
