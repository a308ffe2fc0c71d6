"""
Missing Alt Text Rule — Detects <img> elements without an alt attribute.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import opening_tag
from rta.models.finding_models import Finding


RULE_ID = "missing-alt-text"

_IMG = re.compile(r"<img\b")
_ALT = re.compile(r"\balt\s*=")


def check(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []

    for match in _IMG.finditer(ctx.content):
        tag = opening_tag(ctx.content, match.start())
        # A spread may carry alt; don't guess.
        if _ALT.search(tag) or "{..." in tag:
            continue

        findings.append(
            ctx.finding_at(
                RULE_ID,
                match.start(),
                "Image element is missing alt attribute",
                "Add meaningful alt text to describe the image content",
            )
        )

    return findings
