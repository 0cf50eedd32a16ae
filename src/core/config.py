"""Application configuration using Pydantic Settings.

Every field can be set from the environment (``DATABASE_URL``,
``JWT_SECRET_KEY`` ...) or from a ``.env`` file.
"""

from functools import lru_cache

from pydantic import Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "CHANGE-ME-IN-PRODUCTION"

# Plain driver schemes mapped to the async driver SQLAlchemy needs.
_ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="DevNet API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Document store
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/devnet",
        description="Database connection URL; plain postgresql:// is upgraded to asyncpg",
    )

    # Tokens
    jwt_secret_key: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = Field(default="HS256")
    jwt_expire_minutes: int = Field(
        default=60 * 24 * 5,
        description="Lifetime of issued tokens",
    )

    # GitHub
    github_api_url: str = Field(default="https://api.github.com")
    github_token: str = Field(
        default="",
        description="Optional GitHub token, raises the upstream rate limit",
    )
    github_timeout_seconds: float = Field(default=10.0)

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_read: str = Field(default="30/minute")
    rate_limit_write: str = Field(default="10/minute")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    @model_validator(mode="after")
    def _require_real_secret_in_production(self) -> "Settings":
        if self.is_production and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """``database_url`` with its scheme switched to an async driver."""
        url = self.database_url
        for plain, async_scheme in _ASYNC_DRIVERS.items():
            if url.startswith(plain):
                return async_scheme + url[len(plain) :]
        return url

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
