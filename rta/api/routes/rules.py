"""
Rule Catalog Routes — GET /rules, GET /categories
"""

from __future__ import annotations

from fastapi import APIRouter

from rta.core.catalog import CATEGORIES, list_rules
from rta.models.rule_models import Rule

router = APIRouter()


@router.get("/rules", response_model=list[Rule])
async def rules():
    """Every cataloged rule."""
    return list_rules()


@router.get("/categories")
async def categories():
    return [{"id": name, "description": description} for name, description in CATEGORIES.items()]
