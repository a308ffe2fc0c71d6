"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from rta.llm.gateway import LLMGateway
from rta.llm.reconciler import InsightService


@lru_cache
def get_llm_gateway() -> LLMGateway:
    """Shared LLM gateway singleton."""
    return LLMGateway()


@lru_cache
def get_insight_service() -> InsightService:
    """Shared insight service singleton."""
    return InsightService(get_llm_gateway())
