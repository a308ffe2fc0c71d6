"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from rta.config import APP_VERSION, settings
from rta.core.catalog import RULE_CATALOG

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "model": settings.rta_model,
        "ai_configured": bool(settings.groq_api_key),
        "rules": len(RULE_CATALOG),
        "version": APP_VERSION,
    }
