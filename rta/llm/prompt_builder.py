"""
Prompt Builder — Builds enhancement prompts from deterministic analysis output.

The model receives project metadata, severity counts and a sampled view of
the findings grouped by rule. At most `settings.llm_max_examples_per_rule`
occurrences of any one rule are shown and at most
`settings.llm_max_ordered_findings` findings are listed for suggestion
mapping, so prompt size stays bounded on large projects.
"""

from __future__ import annotations

import json
from typing import Sequence

from rta.config import settings
from rta.core.scorer import severity_counts
from rta.models.analysis_models import AnalysisResult
from rta.models.finding_models import Finding
from rta.models.rule_models import Severity

MAX_MESSAGE_CHARS = 200
MAX_SNIPPET_CHARS = 6000


SYSTEM_PROMPT = """\
You are RTA, an assistant that reviews React and TypeScript code analysis results.

You MUST NOT invent new issues. You explain and prioritise the findings already
detected by the deterministic analyzer and suggest concrete fixes for them.

Respond with a single JSON object and nothing else.
"""

_ANALYSIS_SCHEMA = """\
{
  "summary": "2-4 sentence overview of the project's health and the most important problems",
  "suggestions": ["one actionable suggestion per finding, in the order the findings are listed"]
}"""

_SNIPPET_SCHEMA = """\
{
  "insights": ["observations about the code"],
  "suggestions": ["actionable improvements"]
}"""


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def group_findings(
    findings: Sequence[Finding],
    max_per_rule: int | None = None,
) -> list[dict]:
    """Findings grouped by rule, each group capped to a few example occurrences."""
    cap = settings.llm_max_examples_per_rule if max_per_rule is None else max_per_rule
    groups: dict[str, list[Finding]] = {}
    for finding in findings:
        groups.setdefault(finding.rule_id, []).append(finding)

    return [
        {
            "rule_id": rule_id,
            "severity": items[0].severity.value,
            "count": len(items),
            "examples": [
                {
                    "file": _truncate(f.file, MAX_MESSAGE_CHARS),
                    "line": f.line,
                    "message": _truncate(f.message, MAX_MESSAGE_CHARS),
                }
                for f in items[:cap]
            ],
        }
        for rule_id, items in groups.items()
    ]


def _ordered_findings(findings: Sequence[Finding], limit: int | None = None) -> list[dict]:
    """
    Compact list matching the order suggestions are mapped back onto.

    Only the first `settings.llm_max_ordered_findings` are listed; findings
    past the cap get no AI suggestion and keep their own message.
    """
    cap = settings.llm_max_ordered_findings if limit is None else limit
    return [
        {"index": i, "rule_id": f.rule_id, "file": _truncate(f.file, MAX_MESSAGE_CHARS), "line": f.line}
        for i, f in enumerate(findings[:cap])
    ]


def build_analysis_prompt(result: AnalysisResult) -> str:
    """Prompt for enhancing a full project report."""
    ordered = _ordered_findings(result.findings)
    counts = severity_counts(result.findings)
    metadata = result.metadata
    project = {
        "name": metadata.project_name,
        "framework": metadata.framework,
        "version": metadata.version,
        "typescript": metadata.has_typescript,
        "dependencies": metadata.dependencies[:25],
        "files_analyzed": metadata.files_analyzed,
    }
    stats = {
        "health_score": result.health_score,
        "total_findings": len(result.findings),
        "errors": counts[Severity.ERROR],
        "warnings": counts[Severity.WARNING],
        "info": counts[Severity.INFO],
    }

    return f"""{SYSTEM_PROMPT}
=== PROJECT ===
{json.dumps(project, indent=2)}

=== STATISTICS ===
{json.dumps(stats, indent=2)}

=== FINDINGS BY RULE (sampled) ===
{json.dumps(group_findings(result.findings), indent=2)}

=== FINDING ORDER (first {len(ordered)} of {len(result.findings)}) ===
{json.dumps(ordered)}

Respond with JSON matching this schema:
{_ANALYSIS_SCHEMA}
"""


def build_insights_prompt(findings: Sequence[Finding]) -> str:
    """Prompt for a summary over a bare finding list."""
    return f"""{SYSTEM_PROMPT}
=== FINDINGS BY RULE (sampled) ===
{json.dumps(group_findings(findings), indent=2)}

Respond with JSON matching this schema:
{_ANALYSIS_SCHEMA}
"""


def build_snippet_prompt(code: str, file_path: str, context: str | None = None) -> str:
    """Prompt for reviewing a single code snippet."""
    context_block = f"\n=== CONTEXT ===\n{_truncate(context, MAX_MESSAGE_CHARS * 5)}\n" if context else ""
    return f"""{SYSTEM_PROMPT}
=== FILE ===
{file_path}
{context_block}
=== CODE ===
```tsx
{_truncate(code, MAX_SNIPPET_CHARS)}
```

Respond with JSON matching this schema:
{_SNIPPET_SCHEMA}
"""
