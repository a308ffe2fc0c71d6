"""
Missing Props Interface Rule — Detects TSX components whose props are untyped.

A component's first parameter is untyped when it is a destructuring pattern
or a bare identifier with no `: Type` annotation. Components declared with
a typed const (e.g. `const Card: FC<CardProps> = ...`) are considered typed.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import find_matching
from rta.models.finding_models import Finding


RULE_ID = "react-missing-props-interface"

_FUNCTION_COMPONENT = re.compile(r"\bfunction\s+([A-Z]\w*)\s*(?:<[^>()]*>)?\s*\(")
_CONST_COMPONENT = re.compile(r"\b(?:const|let)\s+([A-Z]\w*)\s*(:[^=\n]+)?=\s*(?:async\s*)?\(")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.file_path.endswith(".tsx"):
        return []

    findings: list[Finding] = []
    for pattern in (_FUNCTION_COMPONENT, _CONST_COMPONENT):
        for match in pattern.finditer(ctx.content):
            if pattern is _CONST_COMPONENT and match.group(2):
                continue
            if _first_param_untyped(ctx.content, match.end()):
                findings.append(
                    ctx.finding_at(
                        RULE_ID,
                        match.start(),
                        f"Component {match.group(1)} props are not typed with an interface",
                        f"Declare an interface {match.group(1)}Props and annotate the props parameter",
                    )
                )
    return findings


def _first_param_untyped(content: str, param_start: int) -> bool:
    i = _skip_space(content, param_start)
    if i >= len(content):
        return False

    if content[i] == "{":
        close = find_matching(content, i)
        if close is None:
            return False
        end = close + 1
    else:
        ident = _IDENTIFIER.match(content, i)
        if ident is None:
            # no parameters, or something we do not recognise
            return False
        end = ident.end()

    after = _skip_space(content, end)
    if content.startswith("?", after):
        after = _skip_space(content, after + 1)
    return after < len(content) and content[after] != ":"


def _skip_space(content: str, i: int) -> int:
    while i < len(content) and content[i].isspace():
        i += 1
    return i
