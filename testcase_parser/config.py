from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import TestCaseFormat


class AppConfig(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="", extra="ignore")

    openai_api_key: str = Field(default="", description="OpenAI API key")
    openai_base_url: str | None = Field(default=None, description="Optional custom base URL")
    openai_model: str = Field(default="gpt-4o-mini", description="Model used to generate test cases")
    request_timeout_s: float = Field(default=60.0, description="Per-request timeout in seconds")
    planner_concurrency: int = Field(default=3, description="Max concurrent LLM calls during batch generation")

    default_format: TestCaseFormat = Field(default=TestCaseFormat.BDD, description="Format assumed for text input")
    log_level: str = Field(default="INFO", description="Log level for the CLI")

    # Discovery
    input_suffixes: List[str] = Field(default_factory=lambda: [".txt", ".feature", ".md", ".json"])
    ignore_globs: List[str] = Field(
        default_factory=lambda: [
            "**/.git/**",
            "**/.venv/**",
            "**/node_modules/**",
            "**/dist/**",
            "**/build/**",
        ]
    )
