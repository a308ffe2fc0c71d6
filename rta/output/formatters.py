"""
Report Formatters — Render an AnalysisResult as a rich table, markdown, or JSON.
"""

from __future__ import annotations

import io
from datetime import datetime

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rta.core.scorer import group_by_category
from rta.models.analysis_models import AnalysisResult
from rta.models.finding_models import Finding
from rta.models.rule_models import Severity

FORMATS = ("table", "markdown", "json")
MAX_FINDINGS_PER_CATEGORY = 5

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}


def _score_style(score: float) -> str:
    return "green" if score >= 8 else "yellow" if score >= 5 else "red"


def _categories(result: AnalysisResult) -> list[tuple[str, list[Finding]]]:
    breakdown = result.metrics.rule_breakdown if result.metrics else group_by_category(result.findings)
    return sorted(breakdown.items(), key=lambda item: (-len(item[1]), item[0]))


def table_renderables(result: AnalysisResult) -> list[RenderableType]:
    """Rich renderables for the table format, in print order."""
    header = Text()
    header.append(f"Project: {result.metadata.project_name}\n")
    header.append(f"Framework: {result.metadata.framework}\n")
    header.append(f"Health Score: {result.health_score}/10", style=f"bold {_score_style(result.health_score)}")
    header.append(f"\nIssues Found: {len(result.findings)}")

    renderables: list[RenderableType] = [
        Panel(header, title="RTA Analysis Results", expand=False, border_style="blue")
    ]

    if not result.findings:
        renderables.append(Panel("No issues found. Great job!", style="green", expand=False))
    else:
        for category, findings in _categories(result):
            table = Table(
                title=f"{category.upper()} ({len(findings)} issues)",
                box=box.SIMPLE,
                title_justify="left",
            )
            table.add_column("Severity", style="bold", no_wrap=True)
            table.add_column("Location", style="cyan", no_wrap=True)
            table.add_column("Rule", no_wrap=True)
            table.add_column("Message")

            for finding in findings[:MAX_FINDINGS_PER_CATEGORY]:
                message = finding.message
                if finding.suggestion:
                    message += f"\n-> {finding.suggestion}"
                table.add_row(
                    Text(finding.severity.value, style=SEVERITY_STYLES[finding.severity]),
                    f"{finding.file}:{finding.line}:{finding.column}",
                    finding.rule_id,
                    message,
                )
            if len(findings) > MAX_FINDINGS_PER_CATEGORY:
                table.caption = f"... and {len(findings) - MAX_FINDINGS_PER_CATEGORY} more issues in this category"
            renderables.append(table)

    if result.ai_enhanced:
        renderables.append(
            Panel(result.summary, title=f"AI Summary ({result.ai_model})", border_style="magenta")
        )
    elif result.ai_error:
        renderables.append(Panel(result.ai_error, title="AI Enhancement Unavailable", border_style="yellow"))

    return renderables


def format_table(result: AnalysisResult, width: int = 110) -> str:
    """Plain-text rendering of the table format (no ANSI codes)."""
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, no_color=True, width=width)
    console.print(Group(*table_renderables(result)))
    return buffer.getvalue()


def format_markdown(result: AnalysisResult) -> str:
    lines = [
        "# RTA Analysis Results",
        "",
        f"**Project:** {result.metadata.project_name}",
        f"**Framework:** {result.metadata.framework}",
        f"**Health Score:** {result.health_score}/10",
        f"**Issues Found:** {len(result.findings)}",
        f"**Analysis Date:** {_date(result.timestamp)}",
        "",
    ]

    if not result.findings:
        lines += ["## No Issues Found", "", "Your React project looks great!", ""]
        return "\n".join(lines)

    if result.metrics:
        lines += [
            "## Metrics",
            "",
            f"- **Files Analyzed:** {result.metrics.analyzed_files}",
            f"- **Errors:** {result.metrics.error_count}",
            f"- **Warnings:** {result.metrics.warning_count}",
            f"- **Info:** {result.metrics.info_count}",
            "",
        ]

    lines += ["## Issues by Category", ""]
    for category, findings in _categories(result):
        lines += [f"### {category.replace('-', ' ').upper()} ({len(findings)} issues)", ""]
        for index, finding in enumerate(findings, start=1):
            lines.append(f"**{index}. [{finding.severity.value.upper()}] {finding.message}**")
            lines.append("")
            lines.append(f"- **File:** `{finding.file}:{finding.line}:{finding.column}`")
            lines.append(f"- **Rule:** `{finding.rule_id}`")
            if finding.suggestion:
                lines.append(f"- **Suggestion:** {finding.suggestion}")
            lines.append("")

    if result.ai_enhanced:
        lines += ["## AI Summary", "", result.summary, ""]

    return "\n".join(lines)


def format_json(result: AnalysisResult) -> str:
    return result.model_dump_json(by_alias=True, indent=2)


def format_output(result: AnalysisResult, fmt: str) -> str:
    """Render a report in one of FORMATS."""
    fmt = fmt.lower()
    if fmt == "json":
        return format_json(result)
    if fmt == "markdown":
        return format_markdown(result)
    if fmt == "table":
        return format_table(result)
    raise ValueError(f"Unknown output format '{fmt}', expected one of {', '.join(FORMATS)}")


def generate_summary(result: AnalysisResult) -> str:
    """Short closing summary printed after the report."""
    lines = [
        "Analysis Summary",
        "=" * 50,
        f"Health Score: {result.health_score}/10",
        f"Issues: {len(result.findings)} total",
    ]
    if result.metrics:
        lines.append(f"Files: {result.metrics.analyzed_files} analyzed")
        for label, count in (
            ("Errors", result.metrics.error_count),
            ("Warnings", result.metrics.warning_count),
            ("Info", result.metrics.info_count),
        ):
            if count:
                lines.append(f"{label}: {count}")
        categories = _categories(result)
        if categories:
            lines.append("")
            lines.append("Issues by Category:")
            lines += [f"  - {category}: {len(findings)} issues" for category, findings in categories]

    if result.diagnostics:
        lines.append("")
        lines.append(f"{len(result.diagnostics)} diagnostic(s) reported; rerun with --verbose for details")

    lines.append("")
    if not result.findings:
        lines.append("Excellent! No issues found!")
    elif not result.ai_enhanced:
        lines.append("Run with --ai for AI-powered insights")
    return "\n".join(lines)


def _date(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).date().isoformat()
    except ValueError:
        return timestamp
