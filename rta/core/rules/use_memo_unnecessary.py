"""
Unnecessary useMemo Rule — Detects useMemo wrapping a primitive literal.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.models.finding_models import Finding


RULE_ID = "useMemo-unnecessary"

_PRIMITIVE_MEMO = re.compile(
    r"\buseMemo\s*\(\s*\(\s*\)\s*=>\s*"
    r"(?:'[^'\n]*'|\"[^\"\n]*\"|true|false|null|undefined|-?\d+(?:\.\d+)?)"
    r"\s*[,)]"
)


def check(ctx: RuleContext) -> list[Finding]:
    return [
        ctx.finding_at(
            RULE_ID,
            match.start(),
            "useMemo is unnecessary for simple primitive values",
            "Remove useMemo for simple primitive values",
        )
        for match in _PRIMITIVE_MEMO.finditer(ctx.content)
    ]
