"""
Missing ARIA Labels Rule — Detects form controls with no accessible name.

A control counts as labelled when it has aria-label, aria-labelledby, or an
id (which a <label htmlFor> can point at). Buttons are also labelled by
their visible content. Hidden inputs are ignored.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import opening_tag
from rta.models.finding_models import Finding


RULE_ID = "missing-aria-labels"

_CONTROL = re.compile(r"<(input|textarea|select|button)\b")
_LABELLED = re.compile(r"\b(?:aria-label|aria-labelledby|id)\s*=")
_HIDDEN_INPUT = re.compile(r"""\btype\s*=\s*["']hidden["']""")
_TAG = re.compile(r"<[^>]*>")


def check(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []

    for match in _CONTROL.finditer(ctx.content):
        element = match.group(1)
        tag = opening_tag(ctx.content, match.start())
        if _LABELLED.search(tag) or "{..." in tag or _HIDDEN_INPUT.search(tag):
            continue
        if element == "button" and _button_has_content(ctx.content, match.start() + len(tag)):
            continue

        findings.append(
            ctx.finding_at(
                RULE_ID,
                match.start(),
                f"{element} element should have accessible labeling",
                "Add aria-label, aria-labelledby, or associate with a label element",
            )
        )

    return findings


def _button_has_content(content: str, after_tag: int) -> bool:
    if content[after_tag - 2:after_tag] == "/>":
        return False
    close = content.find("</button>", after_tag)
    if close == -1:
        return False
    inner = _TAG.sub("", content[after_tag:close])
    return bool(re.search(r"[\w{]", inner))
