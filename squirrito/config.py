# FILE: squirrito/config.py
"""
Configuration management for Squirrito
Loads from environment variables with validation
"""
import logging
import os
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MODELS = [
    "@cf/meta/llama-3.3-8b-instruct",
    "@cf/meta/llama-3.1-8b-instruct",
    "@cf/mistral/mistral-7b-instruct",
]

DEFAULT_FALLBACK_JOKE = (
    "Let's be real, this line is longer than the coffee queue. "
    "Here's a smile while we connect!"
)


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Backend server
    backend_host: str = Field(default="0.0.0.0", alias="BACKEND_HOST")
    backend_port: int = Field(default=8000, alias="BACKEND_PORT")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Workers AI inference
    cloudflare_account_id: Optional[str] = Field(default=None, alias="CLOUDFLARE_ACCOUNT_ID")
    cloudflare_api_token: Optional[str] = Field(default=None, alias="CLOUDFLARE_API_TOKEN")
    workers_ai_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4", alias="WORKERS_AI_BASE_URL"
    )
    inference_models: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MODELS),
        alias="INFERENCE_MODELS",
        description="Candidate models, tried in order until one returns text",
    )
    inference_timeout_seconds: float = Field(default=8.0, alias="INFERENCE_TIMEOUT_SECONDS")

    # Joke generation
    joke_max_tokens: int = Field(default=160, alias="JOKE_MAX_TOKENS")
    joke_temperature: float = Field(default=0.9, alias="JOKE_TEMPERATURE")
    punch_up_enabled: bool = Field(
        default=True,
        alias="PUNCH_UP_ENABLED",
        description="Run a second editorial pass over the first draft",
    )
    fallback_joke_enabled: bool = Field(
        default=True,
        alias="FALLBACK_JOKE_ENABLED",
        description="Answer with FALLBACK_JOKE when every candidate model fails, "
                    "otherwise respond 503",
    )
    fallback_joke: str = Field(default=DEFAULT_FALLBACK_JOKE, alias="FALLBACK_JOKE")

    # Place enrichment (Nominatim)
    geocoder_base_url: str = Field(
        default="https://nominatim.openstreetmap.org", alias="GEOCODER_BASE_URL"
    )
    geocoder_user_agent: str = Field(default="Squirrito/1.0", alias="GEOCODER_USER_AGENT")
    geocoder_timeout_seconds: float = Field(default=5.0, alias="GEOCODER_TIMEOUT_SECONDS")

    # Memory store
    memory_dir: str = Field(default="./data/memory", alias="MEMORY_DIR")
    memory_store_name: str = Field(default="GLOBAL", alias="MEMORY_STORE_NAME")

    # HTTP
    session_cookie_name: str = Field(default="geosid", alias="SESSION_COOKIE_NAME")
    body_size_limit_kb: int = Field(default=64, alias="BODY_SIZE_LIMIT_KB")
    share_cache_max_age: int = Field(default=31536000, alias="SHARE_CACHE_MAX_AGE")

    # Validators
    @field_validator("inference_models")
    @classmethod
    def validate_inference_models(cls, v):
        models = [m.strip() for m in v if m and m.strip()]
        if not models:
            raise ValueError("inference_models must name at least one model")
        return models

    @field_validator("joke_temperature")
    @classmethod
    def validate_joke_temperature(cls, v):
        if not 0.0 <= v <= 2.0:
            raise ValueError("joke_temperature must be between 0.0 and 2.0")
        return v

    @field_validator("joke_max_tokens")
    @classmethod
    def validate_joke_max_tokens(cls, v):
        if v < 16:
            raise ValueError("joke_max_tokens must be at least 16")
        if v > 1024:
            raise ValueError("joke_max_tokens should not exceed 1024")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    @property
    def inference_configured(self) -> bool:
        return bool(self.cloudflare_account_id and self.cloudflare_api_token)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        os.makedirs(self.memory_dir, exist_ok=True)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create singleton settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings (useful for testing)"""
    global _settings
    _settings = None
    return get_settings()
