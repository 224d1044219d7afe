"""
Application-level settings shared by the ragchat service.

Holds what the FastAPI app itself needs at startup: service identity,
log level and the browser origins allowed to call the API. Settings for
storage, retrieval, the model and auth live in their own modules.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """App settings read from RAGCHAT_* variables or `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAGCHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="RAG Chat API", description="Title shown in the OpenAPI docs")
    environment: Literal["development", "production", "test"] = Field(
        default="development",
        description="Deployment environment; production disables the interactive docs",
    )
    log_level: str = Field(default="INFO", description="Root log level for configure_logging()")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API (JSON list in the environment)",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def docs_enabled(self) -> bool:
        return self.environment != "production"
