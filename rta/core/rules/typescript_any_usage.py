"""
TypeScript Any Usage Rule — Detects explicit `any` type annotations.

Reports each `any` type node from the syntax tree. When the tree is not
available, looks for `any` in type positions (after `:`, `as`, `<`, `|`,
`&`, `,` or `(`) on non-comment lines.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.parser import node_text, walk
from rta.core.text_scan import is_comment_line
from rta.models.finding_models import Finding


RULE_ID = "typescript-any-usage"

MESSAGE = "Avoid using 'any' type"
SUGGESTION = "Use a specific type, a generic, or 'unknown' instead of 'any'"

_ANY_IN_TYPE_POSITION = re.compile(r"(?::|\bas\b|[<|&,(])\s*(any)\b(?![\w$])")


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.is_typescript:
        return []
    if ctx.tree is not None:
        return [
            ctx.finding_at_node(RULE_ID, node, MESSAGE, SUGGESTION)
            for node in walk(ctx.tree.root_node)
            if node.type == "predefined_type" and node_text(node, ctx.source) == "any"
        ]
    return _check_text(ctx)


def _check_text(ctx: RuleContext) -> list[Finding]:
    findings: list[Finding] = []
    offset = 0
    for line in ctx.lines:
        if not is_comment_line(line):
            for match in _ANY_IN_TYPE_POSITION.finditer(line):
                findings.append(ctx.finding_at(RULE_ID, offset + match.start(1), MESSAGE, SUGGESTION))
        offset += len(line) + 1
    return findings
