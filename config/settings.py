"""
Application settings using Pydantic Settings.

Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Mastodon API credentials
    mastodon_server: str
    mastodon_client_id: str = ""
    mastodon_client_secret: str = ""
    mastodon_access_token: str
    mastodon_username: str

    # Gemini API
    gemini_api_key: str

    # Accounts allowed to reach the bot through direct messages (JSON list)
    dm_allowlist: list[str] = []

    # Bot configuration
    bot_name: str = "Macr0"
    thread_max_depth: int = 20
    max_reply_chars: int = 500

    # Timeouts (seconds)
    request_timeout: float = 30.0
    llm_timeout: float = 60.0

    @property
    def server_origin(self) -> str:
        """Server origin without a trailing slash."""
        return self.mastodon_server.rstrip("/")

    @property
    def local_domain(self) -> str:
        """Host part of the server origin, used to qualify local handles."""
        return urlparse(self.server_origin).netloc or self.server_origin


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
