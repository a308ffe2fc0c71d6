"""
Invalid Heading Order Rule — Detects headings that skip hierarchy levels.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.models.finding_models import Finding


RULE_ID = "invalid-heading-order"

_HEADING = re.compile(r"<h([1-6])(?=[\s>/])")


def check(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []
    previous: int | None = None

    for match in _HEADING.finditer(ctx.content):
        level = int(match.group(1))
        if previous is not None and level > previous + 1:
            findings.append(
                ctx.finding_at(
                    RULE_ID,
                    match.start(),
                    f"Heading h{level} skips hierarchy levels",
                    f"Use h{previous + 1} instead of h{level} to maintain proper hierarchy",
                )
            )
        previous = level

    return findings
