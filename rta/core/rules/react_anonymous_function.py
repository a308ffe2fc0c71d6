"""
Anonymous Function in JSX Rule — Detects inline functions passed to event handler props.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.models.finding_models import Finding


RULE_ID = "react-anonymous-function"

# onClick={() => ...}  onChange={e => ...}  onSubmit={async (e) => ...}  onBlur={function () {...}}
_INLINE_HANDLER = re.compile(
    r"(?<![\w$.])(on[A-Z]\w*)\s*=\s*\{\s*(?:async\s+)?"
    r"(?:\([^()]*\)\s*(?::\s*[^=>{}]+)?=>|[A-Za-z_$][\w$]*\s*=>|function\b)"
)


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.may_contain_jsx:
        return []

    return [
        ctx.finding_at(
            RULE_ID,
            match.start(),
            f"Anonymous function passed to '{match.group(1)}' is re-created on every render",
            "Extract the handler into a named function or wrap it with useCallback",
        )
        for match in _INLINE_HANDLER.finditer(ctx.content)
    ]
