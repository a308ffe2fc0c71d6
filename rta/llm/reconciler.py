"""
Insight Reconciler — Merges AI output back into an analysis report.

enhance_analysis never raises: any transport or parsing failure returns the
original report annotated with ai_enhanced=False and a human-readable
ai_error. Findings, score and metrics are never changed by a failure.
"""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from rta.config import settings
from rta.core.scorer import group_by_category
from rta.llm.gateway import TransportError
from rta.llm.prompt_builder import (
    build_analysis_prompt,
    build_insights_prompt,
    build_snippet_prompt,
)
from rta.llm.response_parser import (
    ANALYSIS_KEYS,
    SNIPPET_KEYS,
    ResponseParseError,
    parse_ai_response,
)
from rta.models.analysis_models import AnalysisResult
from rta.models.finding_models import Finding
from rta.models.llm_models import (
    ConnectionStatus,
    InsightPayload,
    ModelInfo,
    SnippetInsights,
)

logger = logging.getLogger("rta.llm.reconciler")

PING_PROMPT = 'Reply with the JSON object {"summary": "ok", "suggestions": []}'

AVAILABLE_MODELS: tuple[ModelInfo, ...] = (
    ModelInfo(
        id="llama-3.3-70b-versatile",
        name="Llama 3.3 70B Versatile",
        description="Balanced quality and speed for full project reviews",
        cost_level="medium",
        recommended="Production analysis",
    ),
    ModelInfo(
        id="llama-3.1-8b-instant",
        name="Llama 3.1 8B Instant",
        description="Fastest and cheapest model, shorter and less detailed insights",
        cost_level="low",
        recommended="Development, CI and high-volume runs",
    ),
    ModelInfo(
        id="moonshotai/kimi-k2-instruct-0905",
        name="Kimi K2 Instruct",
        description="Large-context model with the most thorough explanations",
        cost_level="high",
        recommended="Deep reviews of large codebases",
    ),
)


class CompletionGateway(Protocol):
    """The slice of LLMGateway the reconciler depends on."""

    model: str

    def complete(
        self,
        prompt: str,
        max_tokens: int | None = None,
        temperature: float | None = None,
        system: str | None = None,
    ) -> str: ...


def merge_suggestions(findings: Sequence[Finding], suggestions: Sequence[str]) -> tuple[Finding, ...]:
    """Pair suggestion i with finding i; findings past the end keep their own message."""
    merged = []
    for index, finding in enumerate(findings):
        suggestion = suggestions[index] if index < len(suggestions) else finding.message
        merged.append(finding.model_copy(update={"suggestion": suggestion}))
    return tuple(merged)


def describe_failure(error: Exception) -> str:
    if isinstance(error, (TransportError, ResponseParseError)):
        return str(error)
    return f"AI enhancement failed unexpectedly: {type(error).__name__}: {error}"


class InsightService:
    """AI enhancement of analysis reports, findings and snippets."""

    def __init__(self, gateway: CompletionGateway) -> None:
        self.gateway = gateway

    @staticmethod
    def get_available_models() -> list[ModelInfo]:
        return list(AVAILABLE_MODELS)

    def enhance_analysis(self, result: AnalysisResult) -> AnalysisResult:
        """
        Return a derived report with an AI summary and per-finding suggestions.

        Re-enhancing an enhanced report replaces the summary, suggestions and
        provenance together, so ai_enhanced=True always comes with ai_model.
        Only the findings listed in the prompt receive AI suggestions; the
        metrics breakdown is regrouped from the merged findings.

        A failed re-enhancement clears ai_enhanced and ai_model but keeps the
        summary and suggestions written by the earlier successful pass, so
        those fields may hold AI text on a report marked as not enhanced.
        """
        try:
            raw = self.gateway.complete(build_analysis_prompt(result))
            parsed = parse_ai_response(raw, ANALYSIS_KEYS)
        except Exception as e:
            # Enhancement failures never propagate
            cause = describe_failure(e)
            logger.warning("AI enhancement failed: %s", cause)
            return result.model_copy(
                update={"ai_enhanced": False, "ai_model": None, "ai_error": cause}
            )

        logger.info(
            "AI enhancement applied (strategy=%s, %d suggestions)",
            parsed.strategy,
            len(parsed.suggestions),
        )
        merged = merge_suggestions(
            result.findings, parsed.suggestions[: settings.llm_max_ordered_findings]
        )
        metrics = result.metrics
        if metrics is not None:
            metrics = metrics.model_copy(update={"rule_breakdown": group_by_category(merged)})
        return result.model_copy(
            update={
                "summary": parsed.summary or result.summary,
                "findings": merged,
                "metrics": metrics,
                "ai_enhanced": True,
                "ai_model": self.gateway.model,
                "ai_error": None,
            }
        )

    def generate_insights(self, findings: Sequence[Finding]) -> InsightPayload:
        """Summary and suggestions for a finding list.

        Raises:
            TransportError, ResponseParseError
        """
        raw = self.gateway.complete(build_insights_prompt(findings))
        parsed = parse_ai_response(raw, ANALYSIS_KEYS)
        return InsightPayload(summary=parsed.summary, suggestions=parsed.suggestions)

    def analyze_code_snippet(
        self,
        code: str,
        file_path: str,
        context: str | None = None,
    ) -> SnippetInsights:
        raw = self.gateway.complete(build_snippet_prompt(code, file_path, context))
        parsed = parse_ai_response(raw, SNIPPET_KEYS)
        return SnippetInsights(insights=parsed.insights, suggestions=parsed.suggestions)

    def test_connection(self) -> ConnectionStatus:
        """Send a minimal request; report success or the failure cause."""
        try:
            self.gateway.complete(PING_PROMPT, max_tokens=32, temperature=0.0)
        except Exception as e:
            return ConnectionStatus(success=False, model=self.gateway.model, error=describe_failure(e))
        return ConnectionStatus(success=True, model=self.gateway.model)
