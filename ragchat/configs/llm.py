"""
Generation engine configuration settings.

Model selection and credentials for the Gemini chat model.

Dependencies: pydantic, pydantic_settings
System role: LLM configuration for the generation orchestrator
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    model: str = Field(default="gemini-2.5-flash", description="Gemini chat model ID")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "GOOGLE_API_KEY", "LLM_API_KEY"),
        description="Google Generative AI API key",
    )
    default_system_prompt: str = Field(
        default="You are a helpful AI assistant.",
        description="System context used when no retrieval context is available",
    )
