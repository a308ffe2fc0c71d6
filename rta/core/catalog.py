"""
Rule Catalog — Static, read-only registry of every available rule.

Built once at import time. There is no mutation API; callers compose
configurations over this table instead of editing it.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from rta.models.rule_models import Rule, Severity


CATEGORIES: Mapping[str, str] = MappingProxyType({
    "react-hooks": "React hooks best practices and dependency management",
    "performance": "Performance optimizations and anti-patterns",
    "accessibility": "Web accessibility (WCAG) compliance",
    "type-safety": "TypeScript type safety and best practices",
    "correctness": "Code correctness and bug prevention",
    "best-practices": "General React and JavaScript best practices",
})


_RULES: tuple[Rule, ...] = (
    # React hooks
    Rule(
        id="useEffect-missing-deps",
        name="useEffect Missing Dependencies",
        description="useEffect hook is missing dependencies in dependency array",
        default_severity=Severity.WARNING,
        category="react-hooks",
    ),
    Rule(
        id="useMemo-unnecessary",
        name="Unnecessary useMemo",
        description="useMemo is used for simple values that don't need memoization",
        default_severity=Severity.INFO,
        category="react-hooks",
    ),
    Rule(
        id="useCallback-missing-deps",
        name="useCallback Missing Dependencies",
        description="useCallback hook is missing dependencies in dependency array",
        default_severity=Severity.WARNING,
        category="react-hooks",
    ),
    Rule(
        id="useState-complex-object",
        name="Complex State Without Reducer",
        description="Complex state object should use useReducer instead of useState",
        default_severity=Severity.INFO,
        category="react-hooks",
        options={"maxLines": 10},
    ),
    # Performance
    Rule(
        id="component-too-many-props",
        name="Component Has Too Many Props",
        description="Component has more props than the configured maximum, consider refactoring",
        default_severity=Severity.WARNING,
        category="performance",
        options={"maxProps": 10},
    ),
    Rule(
        id="inline-object-creation",
        name="Inline Object Creation in Render",
        description="Avoid creating objects inline in render to prevent unnecessary re-renders",
        default_severity=Severity.WARNING,
        category="performance",
    ),
    Rule(
        id="missing-react-memo",
        name="Missing React.memo for Pure Component",
        description="Consider wrapping component with React.memo for better performance",
        default_severity=Severity.INFO,
        category="performance",
    ),
    Rule(
        id="heavy-computation-render",
        name="Heavy Computation in Render",
        description="Heavy computation detected in render, consider using useMemo",
        default_severity=Severity.WARNING,
        category="performance",
    ),
    # Accessibility
    Rule(
        id="missing-alt-text",
        name="Missing Alt Text",
        description="Image elements should have meaningful alt text for accessibility",
        default_severity=Severity.ERROR,
        category="accessibility",
    ),
    Rule(
        id="missing-aria-labels",
        name="Missing ARIA Labels",
        description="Form inputs should have accessible labels or aria-labels",
        default_severity=Severity.ERROR,
        category="accessibility",
    ),
    Rule(
        id="invalid-heading-order",
        name="Invalid Heading Order",
        description="Heading elements should follow proper hierarchical order",
        default_severity=Severity.WARNING,
        category="accessibility",
    ),
    Rule(
        id="missing-focus-management",
        name="Missing Focus Management",
        description="Modal or dialog components should manage focus properly",
        default_severity=Severity.WARNING,
        category="accessibility",
    ),
    # Core React / TypeScript
    Rule(
        id="react-anonymous-function",
        name="Anonymous Function in JSX Prop",
        description="Inline arrow functions in event handlers are re-created on every render",
        default_severity=Severity.WARNING,
        category="best-practices",
    ),
    Rule(
        id="react-missing-key",
        name="Missing Key in List Rendering",
        description="Elements rendered from a list must carry a stable key prop",
        default_severity=Severity.ERROR,
        category="correctness",
    ),
    Rule(
        id="typescript-any-usage",
        name="TypeScript any Usage",
        description="Usage of the any type disables type checking",
        default_severity=Severity.WARNING,
        category="type-safety",
    ),
    Rule(
        id="react-missing-props-interface",
        name="Missing Props Interface",
        description="Component props should be typed with an interface or type alias",
        default_severity=Severity.INFO,
        category="type-safety",
    ),
)


RULE_CATALOG: Mapping[str, Rule] = MappingProxyType({rule.id: rule for rule in _RULES})


def get_rule(rule_id: str) -> Rule | None:
    """Look up a rule by id. Returns None for unknown ids."""
    return RULE_CATALOG.get(rule_id)


def list_rules() -> list[Rule]:
    """All rules in catalog order."""
    return list(RULE_CATALOG.values())


def rules_by_category() -> dict[str, list[Rule]]:
    grouped: dict[str, list[Rule]] = {}
    for rule in RULE_CATALOG.values():
        grouped.setdefault(rule.category, []).append(rule)
    return grouped
