"""Application configuration using pydantic-settings."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_echo: bool = False

    # Development deployment (relaxed cookies, shared with the web app build)
    dev_mode: bool = Field(default=False, validation_alias="DEV")
    insecure_cookies: bool = Field(default=False, validation_alias="INSECURE_COOKIES")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )
    # Browser extension and localhost origins are allowed in addition to cors_origins
    allow_extension_origins: bool = Field(
        default=True, validation_alias="ALLOW_EXTENSION_ORIGINS",
    )

    # Sessions
    session_ttl_days: int = Field(default=7, validation_alias="SESSION_TTL_DAYS")

    # Pagination
    default_page_size: int = Field(default=10, validation_alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=50, validation_alias="MAX_PAGE_SIZE")

    @property
    def async_database_url(self) -> str:
        """Rewrite plain sqlite/postgresql URLs to their async driver form."""
        if self.database_url.startswith("sqlite://"):
            return self.database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url

    @property
    def is_sqlite(self) -> bool:
        """True when the configured database is SQLite."""
        return self.async_database_url.startswith("sqlite")

    @property
    def secure_cookies(self) -> bool:
        """Whether the session cookie is sent with Secure and SameSite=None."""
        return not (self.dev_mode or self.insecure_cookies)

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def cors_origin_regex(self) -> str | None:
        """Regex matching browser extension and localhost origins, if enabled."""
        if not self.allow_extension_origins:
            return None
        return r"^(chrome-extension|moz-extension)://.+$|^https?://localhost(:\d+)?$"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
