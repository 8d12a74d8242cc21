"""
Generator configuration.

The story generation service takes an explicit GeneratorConfig at
construction. ``from_env()`` builds one from environment variables; loading a
``.env`` file is left to the entry point (see cli.py).
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

from .utils.llm_constants import (
    AVAILABILITY_TIMEOUT_SECONDS,
    MAX_ATTEMPTS,
    PARSE_TIMEOUT_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_DELAY_SECONDS,
)

DEFAULT_MODEL = "gemini-2.0-flash"


class GeneratorConfig(BaseModel):
    """Settings for the model client and the retry/timeout policy."""
    provider: str = "gemini"
    api_key: Optional[str] = Field(default=None, repr=False)
    model_name: str = DEFAULT_MODEL
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_attempts: int = Field(default=MAX_ATTEMPTS, ge=1)
    retry_delay_seconds: float = Field(default=RETRY_DELAY_SECONDS, ge=0.0)
    request_timeout_seconds: float = Field(default=REQUEST_TIMEOUT_SECONDS, gt=0.0)
    availability_timeout_seconds: float = Field(default=AVAILABILITY_TIMEOUT_SECONDS, gt=0.0)
    parse_timeout_seconds: Optional[float] = Field(default=PARSE_TIMEOUT_SECONDS, gt=0.0)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """
        Build configuration from environment variables.

        Uses:
        - LLM_PROVIDER: Provider name (default: 'gemini')
        - GOOGLE_API_KEY or GEMINI_API_KEY: API key
        - LLM_MODEL: Model name (default: gemini-2.0-flash)
        - LLM_TEMPERATURE: Temperature (default: 0.7)
        - STORY_MAX_ATTEMPTS: Attempt budget (default: 3)
        - STORY_RETRY_DELAY: Seconds between attempts (default: 2)
        - STORY_REQUEST_TIMEOUT: Seconds per model call (default: 45)

        Returns:
            GeneratorConfig instance
        """
        return cls(
            provider=os.getenv("LLM_PROVIDER", "gemini").lower(),
            api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
            model_name=os.getenv("LLM_MODEL", DEFAULT_MODEL),
            temperature=float(os.getenv("LLM_TEMPERATURE", "0.7")),
            max_attempts=int(os.getenv("STORY_MAX_ATTEMPTS", str(MAX_ATTEMPTS))),
            retry_delay_seconds=float(os.getenv("STORY_RETRY_DELAY", str(RETRY_DELAY_SECONDS))),
            request_timeout_seconds=float(os.getenv("STORY_REQUEST_TIMEOUT", str(REQUEST_TIMEOUT_SECONDS))),
        )
