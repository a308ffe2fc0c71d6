"""
Finding Data Models — Individual rule violations and engine run results.
"""

from __future__ import annotations

from pydantic import Field

from rta.models.rule_models import FrozenModel, Severity


class Finding(FrozenModel):
    """One concrete occurrence of a rule violation."""

    rule_id: str = Field(..., description="Catalog rule identifier")
    message: str = Field(..., description="Short human-readable description")
    severity: Severity
    file: str = Field(..., description="File path relative to the project root")
    line: int = Field(..., ge=1, description="1-indexed line")
    column: int = Field(..., ge=1, description="1-indexed column")
    suggestion: str | None = None
    category: str | None = None


class FileResult(FrozenModel):
    """Findings and non-fatal diagnostics for a single file."""

    file: str
    findings: tuple[Finding, ...] = ()
    diagnostics: tuple[str, ...] = ()


class RuleResult(FrozenModel):
    """Result of running the engine over a set of files."""

    findings: tuple[Finding, ...] = ()
    diagnostics: tuple[str, ...] = ()
    rules_executed: tuple[str, ...] = ()
    total_files_scanned: int = 0
    cancelled: bool = False
    scan_duration_ms: float = 0.0
