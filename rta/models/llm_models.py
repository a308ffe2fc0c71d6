"""
LLM Data Models — Structured payloads recovered from free-text model output.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class InsightPayload(BaseModel):
    """Project-level insight: one summary plus actionable suggestions."""

    summary: str = ""
    suggestions: list[str] = Field(default_factory=list)


class SnippetInsights(BaseModel):
    """Snippet-level insight: observations plus suggestions."""

    insights: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ParsedResponse(BaseModel):
    """Outcome of the extraction chain over one model response."""

    strategy: str = Field(..., description="Name of the extraction stage that succeeded")
    summary: str = ""
    insights: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ConnectionStatus(BaseModel):
    """Result of a connectivity check against the AI service."""

    success: bool
    model: str | None = None
    error: str | None = None


class ModelInfo(BaseModel):
    """Descriptor of a selectable completion model."""

    id: str
    name: str
    description: str
    cost_level: str
    recommended: str
