"""
config.py
-----------
Typed settings loaded from environment variables (and a local .env file).
The library never reads these on import; get_settings() is called by the
console entry point or by callers that want environment-driven defaults.
"""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _env(name: str, default: Optional[str] = None):
    """Raw environment value; the field's type does the parsing."""
    return lambda: os.getenv(name, default)


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    openai_api_key: str = Field(default_factory=_env("OPENAI_API_KEY", ""))
    openai_base_url: str = Field(
        default_factory=_env("OPENAI_BASE_URL", "https://api.openai.com/v1")
    )
    model: str = Field(default_factory=_env("AGENTGRAPH_MODEL", "gpt-4o-mini"))
    temperature: float = Field(default_factory=_env("AGENTGRAPH_TEMPERATURE", "0"))
    timeout: float = Field(default_factory=_env("AGENTGRAPH_TIMEOUT", "60"))
    max_steps: Optional[int] = Field(default_factory=_env("AGENTGRAPH_MAX_STEPS"))
    log_level: str = Field(default_factory=_env("AGENTGRAPH_LOG_LEVEL", "WARNING"))

    @field_validator("max_steps", mode="before")
    @classmethod
    def _blank_is_unbounded(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("max_steps")
    @classmethod
    def _positive_steps(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("max_steps must be at least 1")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings()


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
