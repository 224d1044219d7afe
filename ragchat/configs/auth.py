"""
Authentication configuration settings.

Supabase project credentials used to resolve caller identity from access tokens.

Dependencies: pydantic_settings
System role: Identity resolver configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Supabase auth configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Supabase project URL")
    key: str | None = Field(default=None, description="Supabase anon or service key")
