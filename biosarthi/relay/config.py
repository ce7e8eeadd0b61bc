"""Relay configuration with environment variable loading.

Pydantic-based configuration for the completion relay.
Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


class RelayConfig(BaseModel):
    """Configuration for the completion relay.

    Supports OpenAI and any OpenAI-compatible API via LLM_BASE_URL.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL (None for OpenAI default).
        model_name: Fixed model identifier every request is sent to.
        temperature: Sampling temperature, None for the provider default.
        max_tokens: Response token cap, None for the provider default.
        max_duration: Upper bound in seconds on one upstream call.
    """

    # Values read from the environment go through the same checks
    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4-turbo"),
        description="Model to use",
    )
    temperature: float | None = Field(
        default_factory=lambda: _optional_env("LLM_TEMPERATURE"),
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int | None = Field(
        default_factory=lambda: _optional_env("LLM_MAX_TOKENS"),
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    max_duration: float = Field(
        default_factory=lambda: os.getenv("RELAY_MAX_DURATION", "30"),
        gt=0.0,
        le=300.0,
        description="Maximum seconds allowed for one streamed completion",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValidationError: If no API key is set or a value is out of range.
    """
    return RelayConfig()
