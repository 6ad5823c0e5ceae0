"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    CorpusError,
    ErrorCode,
    ProuveSearchError,
    SearchError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "ProuveSearchError",
    "SearchError",
    "CorpusError",
]
