"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # .env.local takes precedence over .env
    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="twag")
    app_version: str = Field(default="0.1.0")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/twag",
        description="PostgreSQL connection URL with asyncpg driver",
    )
    db_pool_min_size: int = Field(default=1)
    db_pool_max_size: int = Field(default=5)
    db_pool_idle_timeout: int = Field(
        default=300,
        description="Seconds before an idle pooled connection is recycled",
    )

    # Tags
    creation_path: str = Field(
        default="/tag/create",
        description="Path unknown tags are redirected to",
    )

    # Notion integration
    notion_token: str = Field(
        default="",
        description="Notion integration token; schema checks are skipped when empty",
    )
    notion_api_url: str = Field(default="https://api.notion.com/v1")
    notion_version: str = Field(default="2022-06-28")
    notion_host: str = Field(
        default="www.notion.so",
        description="Host accepted when reading database IDs out of URLs",
    )
    notion_timeout: float = Field(default=10.0)
    notion_tags_database: str = Field(
        default="",
        description="Tags database ID or URL",
    )
    notion_taps_database: str = Field(
        default="",
        description="Taps database ID or URL",
    )
    notion_tags_relation: str = Field(default="Taps")
    notion_taps_relation: str = Field(default="Tag")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def notion_enabled(self) -> bool:
        """Whether the Notion integration is configured."""
        return bool(self.notion_token)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers usually supply a plain ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    # Logging
    log_format: str = Field(
        default="plain",
        description="One of 'json', 'pretty' or 'plain'",
    )
    log_level: str | None = Field(
        default=None,
        description="Overrides the level implied by log_format",
    )

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed origins",
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
