"""
RTA — Health score and finding breakdowns.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from rta.core.catalog import get_rule
from rta.models.analysis_models import AnalysisMetrics
from rta.models.finding_models import Finding
from rta.models.rule_models import SEVERITY_PENALTIES, Severity

MAX_SCORE = 10.0


def calculate_health_score(findings: Iterable[Finding]) -> float:
    """Compute a 0-10 health score from a finding list.

    penalty = 2 per error + 1 per warning + 0.5 per info
    score   = max(0, 10 - penalty), one decimal place

    Only severities count, so the score does not depend on order or on
    which rule produced a finding.
    """
    penalty = sum(SEVERITY_PENALTIES[f.severity] for f in findings)
    return round(max(0.0, MAX_SCORE - penalty), 1)


def severity_counts(findings: Iterable[Finding]) -> dict[Severity, int]:
    counts = Counter(f.severity for f in findings)
    return {severity: counts.get(severity, 0) for severity in Severity}


def group_by_category(findings: Iterable[Finding]) -> dict[str, list[Finding]]:
    """Group findings by their rule's catalog category.

    Findings whose rule id is not in the catalog are left out here, though
    severity_counts still includes them.
    """
    groups: dict[str, list[Finding]] = {}
    for finding in findings:
        rule = get_rule(finding.rule_id)
        if rule is None:
            continue
        groups.setdefault(rule.category, []).append(finding)
    return groups


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    return sorted(findings, key=lambda f: (f.file, f.line, f.column, f.rule_id))


def build_metrics(
    findings: list[Finding],
    total_files: int = 0,
    analyzed_files: int = 0,
    rules_executed: int = 0,
    analysis_time_ms: float = 0.0,
) -> AnalysisMetrics:
    counts = severity_counts(findings)
    return AnalysisMetrics(
        total_files=total_files,
        analyzed_files=analyzed_files,
        error_count=counts[Severity.ERROR],
        warning_count=counts[Severity.WARNING],
        info_count=counts[Severity.INFO],
        overall_health=calculate_health_score(findings),
        rule_breakdown=group_by_category(sort_findings(findings)),
        rules_executed=rules_executed,
        analysis_time_ms=analysis_time_ms,
    )
