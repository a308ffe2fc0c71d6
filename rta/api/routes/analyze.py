"""
RTA — POST /analyze endpoint.

Accepts in-memory files plus the configuration surface (preset, category
allow-list, rule allow-list), runs the deterministic pipeline, and
optionally enhances the report with AI insights.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends

from rta.config import settings
from rta.core.analyzer import analyze_files
from rta.core.config_resolver import resolve_overrides
from rta.api.dependencies import get_insight_service
from rta.llm.reconciler import InsightService
from rta.models.analysis_models import AnalysisResult, ProjectMetadata
from rta.models.api_models import AnalyzeRequest

logger = logging.getLogger("rta.api.analyze")
router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(
    req: AnalyzeRequest,
    insights: InsightService = Depends(get_insight_service),
) -> AnalysisResult:
    """Analyze submitted files and return the report."""
    config = resolve_overrides(req.overrides())

    files: list[tuple[str, str]] = []
    diagnostics: list[str] = []
    for item in req.files:
        size = len(item.content.encode("utf-8"))
        if size > settings.max_file_size_bytes:
            diagnostics.append(f"Skipped {item.path}: file too large ({size} bytes)")
            continue
        files.append((item.path, item.content))

    metadata = ProjectMetadata(
        project_name=req.project_name or "Unknown Project",
        has_typescript=any(path.endswith((".ts", ".tsx")) for path, _ in files),
    )

    # Rule evaluation and the Groq SDK are synchronous
    result = await asyncio.to_thread(
        analyze_files, files, config, metadata, diagnostics
    )
    if req.ai:
        result = await asyncio.to_thread(insights.enhance_analysis, result)

    logger.info(
        "POST /analyze: %d files, %d findings, score %.1f",
        len(files),
        len(result.findings),
        result.health_score,
    )
    return result
