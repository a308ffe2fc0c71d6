"""
Missing Focus Management Rule — Detects modal/dialog code with no focus handling.

File-level heuristic: a file that talks about modals or dialogs but never
uses a ref, calls focus(), or sets autoFocus gets one finding at the first
non-import mention.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import is_comment_line, line_containing
from rta.models.finding_models import Finding


RULE_ID = "missing-focus-management"

_MODAL = re.compile(r"modal|dialog", re.IGNORECASE)
_FOCUS_HANDLING = re.compile(r"\buseRef\b|\.focus\(|\bautoFocus\b|FocusTrap|focus-trap")


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.may_contain_jsx or _FOCUS_HANDLING.search(ctx.content):
        return []

    for match in _MODAL.finditer(ctx.content):
        line = line_containing(ctx.content, match.start())
        if line.lstrip().startswith(("import ", "export * from")) or is_comment_line(line):
            continue
        return [
            ctx.finding_at(
                RULE_ID,
                match.start(),
                "Modal/Dialog component should implement focus management",
                "Add focus management using useRef and focus() method or autoFocus prop",
            )
        ]

    return []
