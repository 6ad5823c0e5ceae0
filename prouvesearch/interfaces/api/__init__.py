"""
API Interface - FastAPI REST API for archive search and recommendations.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
