"""Application configuration using pydantic-settings."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
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
    database_url: str = "sqlite+aiosqlite:///./bookmarks.db"
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")
    create_tables: bool = Field(default=True, validation_alias="CREATE_TABLES")

    # "sql" persists to database_url, "memory" keeps bookmarks in process
    bookmark_store: Literal["sql", "memory"] = Field(
        default="sql", validation_alias="BOOKMARK_STORE",
    )

    # Bookmark validation rules
    min_rating: int = Field(default=1, validation_alias="MIN_RATING")
    max_rating: int = Field(default=5, validation_alias="MAX_RATING")
    require_description: bool = Field(default=False, validation_alias="REQUIRE_DESCRIPTION")
    # PATCH only checks that a recognized field is present unless this is on
    validate_patch_fields: bool = Field(
        default=False, validation_alias="VALIDATE_PATCH_FIELDS",
    )

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:5173",
        validation_alias="CORS_ORIGINS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    # Exposes exception text in 500 responses
    debug: bool = Field(default=False, validation_alias="DEBUG")

    @model_validator(mode="after")
    def validate_rating_bounds(self) -> "Settings":
        """Reject an empty rating range."""
        if self.min_rating > self.max_rating:
            raise ValueError(
                f"MIN_RATING ({self.min_rating}) cannot be greater than "
                f"MAX_RATING ({self.max_rating}).",
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
