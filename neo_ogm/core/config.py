"""
Configuration module for neo-ogm.

Uses pydantic-settings for environment-based configuration. Every
setting can be overridden with a NEO_OGM_ prefixed environment variable.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    Marshalling behaviour:
    - strict_records: Reject result records whose keys and fields differ in length
    """

    model_config = SettingsConfigDict(
        env_prefix="NEO_OGM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # MARSHALLING
    # ===========================================
    strict_records: bool = Field(
        default=True,
        description="Raise MalformedRecordError on misaligned records instead of truncating",
    )

    # ===========================================
    # LOGGING
    # ===========================================
    service_name: str = Field(
        default="neo-ogm",
        description="Service name stamped into JSON log lines",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    log_file_path: str | None = Field(
        default=None,
        description="Rotating JSON log file; disabled when unset",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
