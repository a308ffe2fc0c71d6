"""
Analysis Report Models — the report contract exposed to formatters and the API.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import Field

from rta.models.finding_models import Finding
from rta.models.rule_models import FrozenModel


class ProjectMetadata(FrozenModel):
    """Best-effort project facts derived from package.json."""

    project_name: str = "Unknown Project"
    framework: str = "Unknown"
    version: str = "0.0.0"
    dependencies: list[str] = Field(default_factory=list)
    dev_dependencies: list[str] = Field(default_factory=list)
    has_typescript: bool = False
    files_analyzed: int = 0


class AnalysisMetrics(FrozenModel):
    """Severity counts and category breakdown for a finding list."""

    total_files: int = 0
    analyzed_files: int = 0
    error_count: int = 0
    warning_count: int = 0
    info_count: int = 0
    overall_health: float = 10.0
    rule_breakdown: dict[str, list[Finding]] = Field(
        default_factory=dict, description="Findings grouped by rule category"
    )
    rules_executed: int = 0
    analysis_time_ms: float = 0.0


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AnalysisResult(FrozenModel):
    """Top-level analysis report. Enhancement produces a derived copy."""

    platform: str = "web"
    timestamp: str = Field(default_factory=_utc_now)
    metadata: ProjectMetadata = Field(default_factory=ProjectMetadata)
    findings: tuple[Finding, ...] = ()
    health_score: float = Field(default=10.0, ge=0.0, le=10.0)
    summary: str = ""
    metrics: AnalysisMetrics | None = None
    diagnostics: tuple[str, ...] = Field(
        default=(), description="Non-fatal file/rule/config problems"
    )

    # ── AI provenance ──
    ai_enhanced: bool = False
    ai_model: str | None = None
    ai_error: str | None = None
