"""
API Request Models — Public request schemas for the HTTP endpoints.

Bodies use camelCase keys (`enabledRules`, `projectName`); snake_case is
accepted too.
"""

from __future__ import annotations

from pydantic import Field

from rta.models.rule_models import ConfigOverrides, FrozenModel, RuleConfig


class FileInput(FrozenModel):
    """A single file submitted for analysis."""

    path: str = Field(..., min_length=1, description="File path relative to the project root")
    content: str = Field(..., description="File source content")


class AnalyzeRequest(FrozenModel):
    """Request body for POST /analyze."""

    files: list[FileInput] = Field(..., min_length=1)
    preset: str | None = None
    categories: list[str] | None = None
    enabled_rules: list[str] | None = None
    rules: dict[str, RuleConfig] = Field(default_factory=dict)
    ai: bool = Field(default=False, description="Run AI enhancement on the report")
    project_name: str | None = None

    def overrides(self) -> ConfigOverrides:
        return ConfigOverrides(
            preset=self.preset,
            categories=self.categories,
            enabled_rules=self.enabled_rules,
            rules=self.rules,
        )
