"""
RTA Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
The Groq API key is optional: without it, AI enhancement is reported as
unavailable and the deterministic report is returned unchanged.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── LLM ──
    groq_api_key: str = Field(default="", description="Groq API key for AI enhancement")
    rta_model: str = Field(
        default="llama-3.3-70b-versatile",
        description="Model identifier for Groq completions",
    )
    llm_timeout: float = Field(default=30.0, description="LLM request timeout in seconds")
    llm_max_retries: int = Field(
        default=2, description="Extra attempts after a rate-limit response"
    )
    llm_temperature: float = Field(default=0.2, description="LLM temperature")
    llm_max_tokens: int = Field(default=2048, description="Max output tokens per request")
    llm_max_examples_per_rule: int = Field(
        default=3,
        description="Occurrences of a single rule shown in the enhancement prompt",
    )
    llm_max_ordered_findings: int = Field(
        default=100,
        description="Findings listed individually in the enhancement prompt; later ones keep their own message",
    )

    # ── Analysis ──
    default_preset: str = Field(
        default="recommended", description="Preset used when none is requested"
    )
    max_workers: int = Field(default=8, description="Thread pool size for file evaluation")
    max_file_size_bytes: int = Field(
        default=500_000, description="Files larger than this are skipped"
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance, imported by other modules
settings = Settings()

APP_VERSION = "0.2.0"
