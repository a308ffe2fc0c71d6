"""
Rule Data Models — Severities, rule descriptors, and resolved configuration.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


SEVERITY_PENALTIES: dict[Severity, float] = {
    Severity.ERROR: 2.0,
    Severity.WARNING: 1.0,
    Severity.INFO: 0.5,
}


class Preset(str, Enum):
    MINIMAL = "minimal"
    RECOMMENDED = "recommended"
    STRICT = "strict"


# Rule options are a flat map of scalar values; each rule declares its keys.
OptionValue = Union[bool, int, float, str]


class FrozenModel(BaseModel):
    """Immutable value object serialised with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=False,
    )


class Rule(FrozenModel):
    """Static descriptor of a cataloged rule."""

    id: str = Field(..., description="Unique rule identifier, e.g. 'react-missing-key'")
    name: str
    description: str
    default_severity: Severity
    category: str
    options: dict[str, OptionValue] = Field(
        default_factory=dict,
        description="Option keys this rule recognizes, with their default values",
    )


class RuleConfig(FrozenModel):
    """Per-rule enablement, severity and options override."""

    enabled: bool = True
    severity: Severity | None = None
    options: dict[str, OptionValue] = Field(default_factory=dict)


class AnalyzerConfig(FrozenModel):
    """
    Effective configuration for one analysis run.

    Built once by the resolver and never patched afterwards; changing options
    means resolving a new config.
    """

    preset: Preset = Preset.RECOMMENDED
    categories: dict[str, bool] = Field(default_factory=dict)
    rules: dict[str, RuleConfig] = Field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    def is_enabled(self, rule_id: str) -> bool:
        rule_config = self.rules.get(rule_id)
        return rule_config.enabled if rule_config is not None else True

    def severity_for(self, rule_id: str, default: Severity | None = None) -> Severity | None:
        """Effective severity: override if present, else the given default."""
        rule_config = self.rules.get(rule_id)
        if rule_config is not None and rule_config.severity is not None:
            return rule_config.severity
        return default

    def options_for(self, rule_id: str) -> dict[str, OptionValue]:
        rule_config = self.rules.get(rule_id)
        return dict(rule_config.options) if rule_config is not None else {}

    def enabled_rule_ids(self) -> list[str]:
        return [rule_id for rule_id, rc in self.rules.items() if rc.enabled]


class ConfigOverrides(FrozenModel):
    """
    Caller-supplied configuration surface.

    Also the schema of a project's `.rta.json` file.
    """

    preset: str | None = None
    categories: list[str] | None = Field(
        default=None, description="Category allow-list"
    )
    enabled_rules: list[str] | None = Field(
        default=None, description="Rule allow-list; every other rule is disabled"
    )
    rules: dict[str, RuleConfig] = Field(
        default_factory=dict, description="Per-rule overrides"
    )
    ignore_patterns: list[str] | None = Field(
        default=None, description="Glob patterns of project files to skip"
    )
