from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Universal Cipher Breaker"
    app_env: Literal["development", "staging", "production"] = "development"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Dictionary provider (None = bundled word list)
    word_list_path: Path | None = None

    # Breaking settings
    max_ciphertext_length: int = 100_000
    default_timeout_seconds: float = 30.0
    max_rails: int = 10
    max_key_length: int = 12
    vigenere_trial_budget: int = 10_000

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
