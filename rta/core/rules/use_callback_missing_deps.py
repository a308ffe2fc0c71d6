"""
useCallback Missing Dependencies Rule — Detects useCallback calls without a dependency array.

Without the array, the callback identity changes on every render and the
memoization is wasted.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import call_arguments, is_comment_line, line_containing
from rta.models.finding_models import Finding


RULE_ID = "useCallback-missing-deps"

_CALL = re.compile(r"\buseCallback\s*\(")


def check(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []

    for match in _CALL.finditer(ctx.content):
        if is_comment_line(line_containing(ctx.content, match.start())):
            continue

        args = call_arguments(ctx.content, match.end() - 1)
        if args is None or len(args) >= 2:
            continue

        findings.append(
            ctx.finding_at(
                RULE_ID,
                match.start(),
                "useCallback should include dependency array",
                "Add dependency array as second argument to useCallback",
            )
        )

    return findings
