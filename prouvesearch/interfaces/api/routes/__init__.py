"""
API Routes.
"""

from . import health, recommendations, search

__all__ = ["health", "search", "recommendations"]
