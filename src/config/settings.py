"""
Configuration settings using Pydantic Settings.

Engine tunables are loaded from environment variables (or a local .env file)
so deployments can adjust sample thresholds without code changes.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Order: init kwargs > .env (dotenv) > env vars > file secrets
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    # Aggregate statistics
    recent_match_limit: int = Field(20, ge=0, alias="RECENT_MATCH_LIMIT")

    # Consistency scoring
    consistency_min_sample: int = Field(3, ge=1, alias="CONSISTENCY_MIN_SAMPLE")
    consistency_max_results: int = Field(10, ge=1, alias="CONSISTENCY_MAX_RESULTS")
    consistency_display_limit: int = Field(5, ge=1, alias="CONSISTENCY_DISPLAY_LIMIT")

    # Timeline aggregation
    build_cluster_gap_minutes: int = Field(1, ge=0, alias="BUILD_CLUSTER_GAP_MINUTES")

    # Assistant briefing
    assistant_recent_matches: int = Field(20, ge=1, alias="ASSISTANT_RECENT_MATCHES")
    assistant_top_champions: int = Field(5, ge=1, alias="ASSISTANT_TOP_CHAMPIONS")

    # Observability
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    app_env: str = Field("development", alias="APP_ENV")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the global settings instance.

    This function provides dependency injection support for settings.
    """
    return Settings()
