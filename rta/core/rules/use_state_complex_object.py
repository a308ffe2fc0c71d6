"""
Complex State Rule — Detects useState initialized with a large object or array literal.

Options:
    maxLines: largest initial literal (in lines) tolerated before suggesting
        useReducer.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import find_matching
from rta.models.finding_models import Finding


RULE_ID = "useState-complex-object"

DEFAULT_MAX_LINES = 10

# useState({ ... }) and useState<Shape>([ ... ])
_CALL = re.compile(r"\buseState\s*(?:<[^>()]*>)?\s*\(\s*([{\[])")


def check(ctx: RuleContext) -> list[Finding]:
    max_lines = int(ctx.option("maxLines", DEFAULT_MAX_LINES))
    findings: list[Finding] = []

    for match in _CALL.finditer(ctx.content):
        open_index = match.start(1)
        close_index = find_matching(ctx.content, open_index)
        if close_index is None:
            continue

        span = ctx.content.count("\n", open_index, close_index) + 1
        if span <= max_lines:
            continue

        findings.append(
            ctx.finding_at(
                RULE_ID,
                match.start(),
                f"Complex state object detected ({span} lines), consider using useReducer",
                "Replace complex useState with useReducer for better maintainability",
            )
        )

    return findings
