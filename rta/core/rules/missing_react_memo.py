"""
Missing React.memo Rule — Suggests memoizing function components.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.models.finding_models import Finding


RULE_ID = "missing-react-memo"

_COMPONENT = re.compile(
    r"^[ \t]*(?:export\s+)?(?:default\s+)?"
    r"(?:function\s+([A-Z]\w*)\s*\("
    r"|const\s+([A-Z]\w*)\s*(?::[^=\n]+)?=\s*(?:\([^()]*\)|[A-Za-z_$][\w$]*)\s*(?::\s*[\w.<>\[\]]+\s*)?=>)",
    re.MULTILINE,
)

_JSX = re.compile(r"<[A-Za-z>]")


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.may_contain_jsx or not _JSX.search(ctx.content):
        return []

    findings: list[Finding] = []
    for match in _COMPONENT.finditer(ctx.content):
        name = match.group(1) or match.group(2)
        if re.search(rf"\bmemo\(\s*{re.escape(name)}\b", ctx.content):
            continue

        offset = match.start(1) if match.group(1) else match.start(2)
        findings.append(
            ctx.finding_at(
                RULE_ID,
                offset,
                f"Consider wrapping {name} with React.memo",
                "Wrap component with React.memo to prevent unnecessary re-renders",
            )
        )
    return findings
