"""
Inline Object Creation Rule — Detects object or array literals passed directly as JSX props.

A literal in a prop is a new reference on every render, defeating
memoized children and shallow prop comparison.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import is_comment_line, line_containing
from rta.models.finding_models import Finding


RULE_ID = "inline-object-creation"

_INLINE_LITERAL_PROP = re.compile(r"(?<![\w$.])([A-Za-z][\w-]*)=\{\s*([{\[])")


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.may_contain_jsx:
        return []

    findings: list[Finding] = []
    for match in _INLINE_LITERAL_PROP.finditer(ctx.content):
        if is_comment_line(line_containing(ctx.content, match.start())):
            continue
        kind = "object" if match.group(2) == "{" else "array"
        findings.append(
            ctx.finding_at(
                RULE_ID,
                match.start(),
                f"Avoid inline {kind} creation in JSX prop '{match.group(1)}'",
                "Move object creation outside render or use useMemo",
            )
        )
    return findings
