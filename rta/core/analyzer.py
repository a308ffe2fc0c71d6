"""
Analyzer — Runs the deterministic pipeline and assembles the report.

Pipeline:
1. Resolve the effective config (.rta.json, then caller overrides)
2. Collect source files and project metadata
3. Evaluate every enabled rule on every file
4. Score findings and build metrics
5. Assemble an AnalysisResult

AI enhancement is a separate, optional step applied to the returned result.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable

from rta.core.config_resolver import load_config_file, resolve_overrides
from rta.core.rule_engine import RuleEngine
from rta.core.scorer import build_metrics, calculate_health_score
from rta.models.analysis_models import AnalysisResult, ProjectMetadata
from rta.models.rule_models import AnalyzerConfig, ConfigOverrides
from rta.project.file_source import iter_source_files
from rta.project.metadata import load_project_metadata

logger = logging.getLogger("rta.analyzer")


class ProjectNotFoundError(Exception):
    """The project path does not exist or is not a directory."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Project path does not exist: {self.path}")


def default_summary(finding_count: int, file_count: int) -> str:
    return f"Found {finding_count} issues in {file_count} files"


def merge_overrides(base: ConfigOverrides, top: ConfigOverrides) -> ConfigOverrides:
    """Fields the caller explicitly set on `top` win over `base`."""
    update = {name: getattr(top, name) for name in top.model_fields_set}
    if "rules" in update:
        update["rules"] = {**base.rules, **top.rules}
    return base.model_copy(update=update)


def analyze_project(
    path: str | Path,
    overrides: ConfigOverrides | None = None,
    cancel_event: threading.Event | None = None,
    use_config_file: bool = True,
) -> AnalysisResult:
    """
    Analyze every source file under a project directory.

    Raises:
        ProjectNotFoundError: if `path` is not an existing directory.
    """
    root = Path(path)
    if not root.is_dir():
        raise ProjectNotFoundError(path)

    effective = overrides or ConfigOverrides()
    if use_config_file:
        effective = merge_overrides(load_config_file(root), effective)

    config = resolve_overrides(effective)
    logger.info(
        "Analyzing %s with preset '%s' (%d rules enabled)",
        root,
        config.preset.value,
        len(config.enabled_rule_ids()),
    )

    diagnostics: list[str] = []
    files = list(iter_source_files(root, effective.ignore_patterns or (), diagnostics))
    metadata = load_project_metadata(root)

    return analyze_files(
        files,
        config,
        metadata=metadata,
        diagnostics=diagnostics,
        cancel_event=cancel_event,
    )


def analyze_files(
    files: Iterable[tuple[str, str]],
    config: AnalyzerConfig,
    metadata: ProjectMetadata | None = None,
    diagnostics: Iterable[str] = (),
    cancel_event: threading.Event | None = None,
) -> AnalysisResult:
    """Evaluate in-memory (path, content) pairs and build the report."""
    file_list = list(files)
    engine = RuleEngine(config)
    run = engine.run(file_list, cancel_event=cancel_event)

    findings = list(run.findings)
    metrics = build_metrics(
        findings,
        total_files=len(file_list),
        analyzed_files=run.total_files_scanned,
        rules_executed=len(run.rules_executed),
        analysis_time_ms=run.scan_duration_ms,
    )

    base_metadata = metadata or ProjectMetadata()
    all_diagnostics = (*config.warnings, *diagnostics, *run.diagnostics)
    if run.cancelled:
        all_diagnostics += (
            f"Analysis cancelled after {run.total_files_scanned} of {len(file_list)} files",
        )

    logger.info(
        "Analysis complete: %d findings in %d files (%.1f ms)",
        len(findings),
        run.total_files_scanned,
        run.scan_duration_ms,
    )

    return AnalysisResult(
        metadata=base_metadata.model_copy(update={"files_analyzed": run.total_files_scanned}),
        findings=tuple(findings),
        health_score=calculate_health_score(findings),
        summary=default_summary(len(findings), run.total_files_scanned),
        metrics=metrics,
        diagnostics=all_diagnostics,
    )
