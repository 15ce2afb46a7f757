"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Recipe store
    database_url: str = "sqlite:///./pantrymatch.db"

    # Batch fix workflow
    fix_preview_limit: int = 20  # example diffs shown in dry-run mode

    # Matching
    partial_match_threshold: float = 85.0  # rapidfuzz ratio for "similar ingredient"

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
