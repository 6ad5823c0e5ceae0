"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from prouvesearch import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "prouvesearch"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "Prouvé Archive API",
        "version": __version__,
        "description": "Search and recommendations over the Jean Prouvé archive",
        "docs": "/docs",
    }
