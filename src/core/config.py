"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Mini LinkedIn API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)

    # Database
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string",
    )
    mongodb_database: str = Field(default="mini-linkedin")
    user_repository: Literal["mongodb", "inmemory"] = Field(
        default="mongodb",
        description="User store backend (inmemory is for tests and local runs)",
    )
    db_connect_attempts: int = Field(
        default=5,
        ge=1,
        description="Startup connection attempts before giving up",
    )
    db_connect_max_backoff: float = Field(
        default=30.0,
        description="Upper bound in seconds for the wait between connection attempts",
    )

    # Proxy
    user_service_url: str = Field(
        default="http://localhost:5000/api",
        description="Base URL of the backend API as seen by the proxy",
    )
    proxy_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the proxy as seen by the client session",
    )
    proxy_timeout: float = Field(default=10.0)

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma-separated list of allowed origins",
    )
    cors_origin_regex: str = Field(
        default=r"https://.*\.vercel\.app",
        description="Regex of additional allowed origins (preview deployments)",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
