"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gymdesk.core.constants import ACCESS_DENIED_MESSAGE, VALID_LOG_LEVELS


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GYMDESK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Gym Desk"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Profile store
    database_url: str = "sqlite+aiosqlite:///./gymdesk.db"
    database_echo: bool = False

    # Access control
    access_denied_message: str = ACCESS_DENIED_MESSAGE

    # API Documentation
    api_docs_base_url: str = "https://gymdesk.example.com"

    # Observability
    log_level: str = "INFO"
    log_json: bool | None = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return level

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def use_json_logs(self) -> bool:
        """JSON log rendering, on by default in production."""
        if self.log_json is None:
            return self.is_production
        return self.log_json


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
