"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Simulated AI latency windows (seconds)
    generation_latency_min: float = 1.5
    generation_latency_max: float = 2.5
    assistant_latency_min: float = 1.5
    assistant_latency_max: float = 1.5

    # Generation backend: "simulated" or "deepseek"
    generation_backend: str = "simulated"
    generation_timeout_seconds: float = 30.0

    # DeepSeek AI (OpenAI-compatible)
    deepseek_api_key: str = ""
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model: str = "deepseek-chat"

    # Image ingestion
    max_image_size_mb: int = 10
    max_avatar_size_mb: int = 5
    allowed_image_types: List[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
    ]

    # JWT Auth (mock sessions, safe defaults)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # App
    debug: bool = True
    log_level: str = "INFO"

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024

    @property
    def max_avatar_size_bytes(self) -> int:
        return self.max_avatar_size_mb * 1024 * 1024

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
