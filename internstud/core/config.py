"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB (document store for every collection)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "internstud"

    # Generative AI (OpenAI-compatible endpoint, Gemini by default)
    ai_api_key: str = ""
    ai_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    ai_model: str = "gemini-1.5-flash"
    ai_temperature: float = 0.7
    ai_max_tokens: int = 1200
    interview_language: str = "Romanian"

    # SMTP relay for the contact form
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_use_tls: bool = True
    email_user: str = ""
    email_password: str = ""
    email_user1: str = ""

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # App
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    debug: bool = False

    @property
    def contact_recipients(self) -> List[str]:
        """Default inboxes for contact messages (skips unset addresses)."""
        return [addr for addr in (self.email_user, self.email_user1) if addr]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
