"""Configuration management for the Shell Profiler."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from .analyzer.classifier import CATEGORY_RULES


load_dotenv()


DEFAULT_MODEL = "gemini/gemini-1.5-flash"


def default_category_rules() -> dict[str, list[str]]:
    return {category: list(prefixes) for category, prefixes in CATEGORY_RULES.items()}


class Config(BaseModel):
    """Application configuration."""

    # LLM Settings
    llm_provider: str = Field(default="litellm")
    model_name: str = Field(default=DEFAULT_MODEL)
    api_key: Optional[str] = Field(default=None)
    max_retries: int = Field(default=0)
    timeout: int = Field(default=60)

    # Tool probe Settings
    probe_timeout: float = Field(default=3.0)
    probe_workers: int = Field(default=8)
    max_candidates: int = Field(default=10)
    category_rules: dict[str, list[str]] = Field(default_factory=default_category_rules)

    # Output Settings
    timeline_limit: int = Field(default=15)
    home_dir: Optional[Path] = Field(default=None)
    log_file: Optional[Path] = Field(default=None)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        def _parse_float(value: Optional[str], fallback: float) -> float:
            try:
                return float(value) if value is not None else fallback
            except ValueError:
                return fallback

        category_rules = default_category_rules()
        dev_tools = os.getenv("DEV_TOOLS")
        if dev_tools:
            category_rules["development"] = [
                name.strip() for name in dev_tools.split(",") if name.strip()
            ]

        home_env = os.getenv("SHELL_PROFILER_HOME")
        log_env = os.getenv("SHELL_PROFILER_LOG")

        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "litellm"),
            model_name=os.getenv("MODEL_NAME", DEFAULT_MODEL),
            api_key=(
                os.getenv("LLM_API_KEY")
                or os.getenv("GEMINI_API_KEY")
                or os.getenv("ANTHROPIC_API_KEY")
            ),
            max_retries=_parse_int(os.getenv("LLM_MAX_RETRIES"), 0),
            timeout=_parse_int(os.getenv("LLM_TIMEOUT"), 60),
            probe_timeout=_parse_float(os.getenv("PROBE_TIMEOUT"), 3.0),
            probe_workers=_parse_int(os.getenv("PROBE_WORKERS"), 8),
            max_candidates=_parse_int(os.getenv("MAX_TOOL_CANDIDATES"), 10),
            category_rules=category_rules,
            timeline_limit=_parse_int(os.getenv("TIMELINE_LIMIT"), 15),
            home_dir=Path(home_env) if home_env else None,
            log_file=Path(log_env) if log_env else None,
        )
