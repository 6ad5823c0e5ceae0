"""
CLI Interface - Command-line tools for the Prouvé archive.

Provides commands for:
- Search, suggestions and filter discovery
- Recommendations for works, scholars and biography sections
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]
