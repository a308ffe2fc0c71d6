"""
Heavy Computation in Render Rule — Detects expensive operations inside returned JSX.

Looks inside `return (...)` blocks and single-line `return <...` statements.
Plain `.map()` is the normal way to render lists and is not reported; the
operations below allocate or walk whole collections on every render.
"""

from __future__ import annotations

import re

from rta.core.context import RuleContext
from rta.core.text_scan import find_matching
from rta.models.finding_models import Finding


RULE_ID = "heavy-computation-render"

_RETURN_BLOCK = re.compile(r"\breturn\s*\(")
_RETURN_INLINE = re.compile(r"\breturn\s*<[^\n]*")

_HEAVY_OPERATION = re.compile(
    r"\.(?:sort|filter|reduce|find|forEach)\s*\("
    r"|\bJSON\.(?:parse|stringify)\s*\("
    r"|\bObject\.(?:keys|values|entries)\s*\("
    r"|\bArray\.from\s*\("
)


def check(ctx: RuleContext) -> list[Finding]:
    if not ctx.may_contain_jsx:
        return []

    findings: list[Finding] = []
    seen: set[int] = set()
    for start, end in _render_regions(ctx.content):
        region = ctx.content[start:end]
        if "<" not in region or "useMemo" in region or "useCallback" in region:
            continue

        for op in _HEAVY_OPERATION.finditer(region):
            # Nested return blocks overlap their parent region.
            if start + op.start() in seen:
                continue
            seen.add(start + op.start())
            findings.append(
                ctx.finding_at(
                    RULE_ID,
                    start + op.start(),
                    f"Heavy computation '{op.group().strip('.( ')}' detected in render",
                    "Consider using useMemo to memoize expensive computations",
                )
            )
    return findings


def _render_regions(content: str) -> list[tuple[int, int]]:
    regions: list[tuple[int, int]] = []
    for match in _RETURN_BLOCK.finditer(content):
        close = find_matching(content, match.end() - 1)
        if close is not None:
            regions.append((match.end(), close))
    for match in _RETURN_INLINE.finditer(content):
        regions.append((match.start(), match.end()))
    return regions
