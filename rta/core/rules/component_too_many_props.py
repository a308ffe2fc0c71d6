"""
Too Many Props Rule — Detects components destructuring more props than allowed.

Options:
    maxProps: largest number of destructured props tolerated.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import find_matching, split_top_level
from rta.models.finding_models import Finding


RULE_ID = "component-too-many-props"

DEFAULT_MAX_PROPS = 10

# function Card({ ... })  /  const Card = ({ ... }) =>  /  const Card: FC<P> = ({ ... }) =>
_COMPONENT_PATTERNS = (
    re.compile(r"\bfunction\s+([A-Z]\w*)\s*(?:<[^>()]*>)?\s*\(\s*(\{)"),
    re.compile(r"\b(?:const|let)\s+([A-Z]\w*)\s*(?::[^=\n]+)?=\s*(?:async\s*)?\(\s*(\{)"),
)


def check(ctx: RuleContext) -> list[Finding]:
    max_props = int(ctx.option("maxProps", DEFAULT_MAX_PROPS))
    findings: list[Finding] = []

    for pattern in _COMPONENT_PATTERNS:
        for match in pattern.finditer(ctx.content):
            open_index = match.start(2)
            close_index = find_matching(ctx.content, open_index)
            if close_index is None:
                continue

            props = split_top_level(ctx.content[open_index + 1:close_index])
            if len(props) <= max_props:
                continue

            findings.append(
                ctx.finding_at(
                    RULE_ID,
                    match.start(),
                    f"Component {match.group(1)} has {len(props)} props, consider refactoring",
                    "Consider grouping related props into objects or using composition",
                )
            )

    return findings
