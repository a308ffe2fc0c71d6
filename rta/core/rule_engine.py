"""
Rule Engine — Runs every enabled rule matcher against source files.

Each file is parsed once (best-effort) and handed to the matchers as a
RuleContext. Matchers are pure functions, so files are evaluated on a
thread pool; a matcher that raises is isolated to a diagnostic and never
stops other rules or files.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping

from rta.config import settings
from rta.core.catalog import get_rule
from rta.core.context import MatcherFn, RuleContext
from rta.core.parser import SourceParser
from rta.core.scorer import sort_findings
from rta.models.finding_models import FileResult, Finding, RuleResult
from rta.models.rule_models import AnalyzerConfig

# Import all rule modules
from rta.core.rules import (
    component_too_many_props,
    heavy_computation_render,
    inline_object_creation,
    invalid_heading_order,
    missing_alt_text,
    missing_aria_labels,
    missing_focus_management,
    missing_react_memo,
    react_anonymous_function,
    react_missing_key,
    react_missing_props_interface,
    typescript_any_usage,
    use_callback_missing_deps,
    use_effect_missing_deps,
    use_memo_unnecessary,
    use_state_complex_object,
)

logger = logging.getLogger("rta.engine")

# Registry of all rule matchers, keyed by catalog rule id
MATCHER_REGISTRY: Mapping[str, MatcherFn] = {
    use_effect_missing_deps.RULE_ID: use_effect_missing_deps.check,
    use_memo_unnecessary.RULE_ID: use_memo_unnecessary.check,
    use_callback_missing_deps.RULE_ID: use_callback_missing_deps.check,
    use_state_complex_object.RULE_ID: use_state_complex_object.check,
    component_too_many_props.RULE_ID: component_too_many_props.check,
    inline_object_creation.RULE_ID: inline_object_creation.check,
    missing_react_memo.RULE_ID: missing_react_memo.check,
    heavy_computation_render.RULE_ID: heavy_computation_render.check,
    missing_alt_text.RULE_ID: missing_alt_text.check,
    missing_aria_labels.RULE_ID: missing_aria_labels.check,
    invalid_heading_order.RULE_ID: invalid_heading_order.check,
    missing_focus_management.RULE_ID: missing_focus_management.check,
    react_anonymous_function.RULE_ID: react_anonymous_function.check,
    react_missing_key.RULE_ID: react_missing_key.check,
    typescript_any_usage.RULE_ID: typescript_any_usage.check,
    react_missing_props_interface.RULE_ID: react_missing_props_interface.check,
}


class RuleEngine:
    """
    Evaluates source files under one resolved AnalyzerConfig.

    The config and matcher table are only read, so a single engine can be
    shared by all worker threads.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        matchers: Mapping[str, MatcherFn] | None = None,
        parser: SourceParser | None = None,
    ) -> None:
        self.config = config
        self.matchers = matchers if matchers is not None else MATCHER_REGISTRY
        self.parser = parser or SourceParser()

    def active_rules(self) -> list[str]:
        """Rule ids that are enabled and have a matcher, in registry order."""
        return [rule_id for rule_id in self.matchers if self.config.is_enabled(rule_id)]

    def evaluate(self, content: str, file_path: str) -> list[Finding]:
        """Findings for a single file, carrying effective severities."""
        return list(self.evaluate_file(content, file_path).findings)

    def evaluate_file(self, content: str, file_path: str) -> FileResult:
        ctx = self._build_context(content, file_path)
        findings: list[Finding] = []
        diagnostics: list[str] = []

        for rule_id in self.active_rules():
            check_fn = self.matchers[rule_id]
            try:
                raw = check_fn(ctx.with_options(self.config.options_for(rule_id)))
            except Exception as e:
                # Rule failures should not crash the engine
                logger.warning("Rule '%s' failed on %s: %s", rule_id, file_path, e, exc_info=True)
                diagnostics.append(f"Rule '{rule_id}' failed on {file_path}: {type(e).__name__}: {e}")
                continue
            findings.extend(self._finalize(raw))

        return FileResult(file=file_path, findings=tuple(findings), diagnostics=tuple(diagnostics))

    def run(
        self,
        files: Iterable[tuple[str, str]],
        cancel_event: threading.Event | None = None,
    ) -> RuleResult:
        """
        Evaluate many files concurrently.

        Args:
            files: (relative path, text content) pairs.
            cancel_event: When set, files not yet started are skipped.

        Returns:
            RuleResult with findings sorted by file, line and column.
        """
        start = time.monotonic()
        file_list = list(files)

        def _task(item: tuple[str, str]) -> FileResult | None:
            if cancel_event is not None and cancel_event.is_set():
                return None
            path, content = item
            try:
                return self.evaluate_file(content, path)
            except Exception as e:
                logger.error("Evaluation of %s failed: %s", path, e, exc_info=True)
                return FileResult(file=path, diagnostics=(f"Could not analyze {path}: {e}",))

        with ThreadPoolExecutor(max_workers=max(1, settings.max_workers)) as pool:
            results = list(pool.map(_task, file_list))

        findings: list[Finding] = []
        diagnostics: list[str] = []
        scanned = 0
        for result in results:
            if result is None:
                continue
            scanned += 1
            findings.extend(result.findings)
            diagnostics.extend(result.diagnostics)

        cancelled = cancel_event is not None and cancel_event.is_set() and scanned < len(file_list)
        if cancelled:
            logger.info("Analysis cancelled after %d of %d files", scanned, len(file_list))

        elapsed = (time.monotonic() - start) * 1000

        return RuleResult(
            findings=tuple(sort_findings(findings)),
            diagnostics=tuple(diagnostics),
            rules_executed=tuple(self.active_rules()),
            total_files_scanned=scanned,
            cancelled=cancelled,
            scan_duration_ms=round(elapsed, 2),
        )

    def _build_context(self, content: str, file_path: str) -> RuleContext:
        try:
            tree, source = self.parser.parse(content, file_path)
        except ValueError:
            logger.debug("No clean syntax tree for %s, matchers use text heuristics", file_path)
            return RuleContext(file_path=file_path, content=content)
        return RuleContext(file_path=file_path, content=content, tree=tree, source=source)

    def _finalize(self, raw: list[Finding]) -> list[Finding]:
        """Drop findings for unknown rules and stamp effective severity and category."""
        finalized: list[Finding] = []
        for finding in raw:
            rule = get_rule(finding.rule_id)
            if rule is None:
                logger.warning("Dropping finding for unknown rule '%s'", finding.rule_id)
                continue
            severity = self.config.severity_for(rule.id, rule.default_severity)
            finalized.append(finding.model_copy(update={"severity": severity, "category": rule.category}))
        return finalized
