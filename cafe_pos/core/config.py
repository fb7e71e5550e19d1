"""Application configuration using pydantic-settings.

All environment variables should be accessed through the settings object
rather than using os.getenv() directly. The same settings drive both the
FastAPI server and the API client (remote URL, timeouts, cache and
circuit breaker tuning).
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database used by the server
    database_url: str = "sqlite:///./data/cafe_pos.db"

    # CORS - comma-separated origins or "*" for development only
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Local calendar day for sales/waste/attendance bucketing
    timezone: str = "Africa/Cairo"

    # Server
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Rate limiting
    rate_limit_enabled: bool = True

    # ==========================================================================
    # API client (remote store + local fallback)
    # ==========================================================================
    remote_api_url: str = "http://localhost:8000/api/v1"
    local_database_url: str = "sqlite:///./data/cafe_pos_local.db"
    client_request_timeout: float = 10.0
    client_health_timeout: float = 5.0
    client_cache_ttl_seconds: int = 30
    breaker_failure_threshold: int = 1
    breaker_reset_timeout: float = 60.0

    @field_validator("breaker_failure_threshold")
    @classmethod
    def validate_failure_threshold(cls, v: int) -> int:
        if v < 1:
            raise ValueError("breaker_failure_threshold must be at least 1")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
