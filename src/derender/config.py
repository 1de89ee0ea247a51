"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "derender"
    storage_public_base_url: str | None = None
    image_provider: Literal["gemini", "openai"] = "gemini"
    google_api_key: str | None = None
    gemini_model: str = "gemini-3-pro-image-preview"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    sync_secret: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def model_id(self) -> str:
        """Identifier of the image model recorded alongside outputs."""
        if self.image_provider == "openai":
            return self.openai_model
        return self.gemini_model

    def model_api_key(self) -> str | None:
        """Credential for the configured image model provider."""
        if self.image_provider == "openai":
            return self.openai_api_key
        return self.google_api_key

    def model_api_key_name(self) -> str:
        """Environment variable holding the image model credential."""
        if self.image_provider == "openai":
            return "OPENAI_API_KEY"
        return "GOOGLE_API_KEY"

    def resolved_public_base_url(self) -> str:
        """Public storage host, defaulting to the Supabase public object route."""
        if self.storage_public_base_url:
            return self.storage_public_base_url
        return f"{self.supabase_url.rstrip('/')}/storage/v1/object/public"
