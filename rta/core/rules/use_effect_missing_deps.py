"""
useEffect Missing Dependencies Rule — Detects useEffect calls without a dependency array.

An effect with no second argument re-runs after every render, which is
almost never intended and frequently causes render loops.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import call_arguments, is_comment_line, line_containing
from rta.models.finding_models import Finding


RULE_ID = "useEffect-missing-deps"

_CALL = re.compile(r"\buseEffect\s*\(")


def check(ctx: RuleContext) -> list[Finding]:
    """Flag every useEffect(...) call that has fewer than two arguments."""
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
                "useEffect should include dependency array",
                "Add dependency array as second argument",
            )
        )

    return findings
