"""
Rule Context — Immutable per-file input handed to every matcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from tree_sitter import Node, Tree

from rta.core.catalog import RULE_CATALOG
from rta.core.parser import node_position
from rta.models.finding_models import Finding
from rta.models.rule_models import OptionValue

_TYPESCRIPT_SUFFIXES = (".ts", ".tsx", ".mts", ".cts")
_JSX_SUFFIXES = (".tsx", ".jsx", ".js")


@dataclass(frozen=True)
class RuleContext:
    """
    Everything a matcher may look at for one file.

    `tree` is a best-effort syntax tree; it is None when parsing failed and
    matchers must fall back to text heuristics.
    """

    file_path: str
    content: str
    tree: Tree | None = None
    source: bytes = b""
    options: Mapping[str, OptionValue] = field(default_factory=dict)

    @property
    def lines(self) -> list[str]:
        return self.content.split("\n")

    @property
    def is_typescript(self) -> bool:
        return self.file_path.endswith(_TYPESCRIPT_SUFFIXES)

    @property
    def may_contain_jsx(self) -> bool:
        return self.file_path.endswith(_JSX_SUFFIXES)

    def with_options(self, options: Mapping[str, OptionValue]) -> "RuleContext":
        return RuleContext(
            file_path=self.file_path,
            content=self.content,
            tree=self.tree,
            source=self.source,
            options=dict(options),
        )

    def option(self, key: str, default: OptionValue) -> OptionValue:
        return self.options.get(key, default)

    def position(self, offset: int) -> tuple[int, int]:
        """1-indexed (line, column) of a character offset into content."""
        line = self.content.count("\n", 0, offset) + 1
        column = offset - (self.content.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def finding_at(
        self,
        rule_id: str,
        offset: int,
        message: str,
        suggestion: str | None = None,
    ) -> Finding:
        line, column = self.position(offset)
        return make_finding(self, rule_id, line, column, message, suggestion)

    def finding_at_node(
        self,
        rule_id: str,
        node: Node,
        message: str,
        suggestion: str | None = None,
    ) -> Finding:
        line, column = node_position(node, self.source)
        return make_finding(self, rule_id, line, column, message, suggestion)


def make_finding(
    ctx: RuleContext,
    rule_id: str,
    line: int,
    column: int,
    message: str,
    suggestion: str | None = None,
) -> Finding:
    """Build a finding carrying the rule's catalog severity and category.

    The engine re-stamps the effective severity afterwards.
    """
    rule = RULE_CATALOG[rule_id]
    return Finding(
        rule_id=rule_id,
        message=message,
        severity=rule.default_severity,
        file=ctx.file_path,
        line=line,
        column=column,
        suggestion=suggestion,
        category=rule.category,
    )


# Type for a rule matcher function
MatcherFn = Callable[[RuleContext], list[Finding]]
