"""
Process settings using pydantic-settings for type-safe configuration.

Environment variables that locate inputs (config file, org chart, alias
table) and the optional PocketBase alias backend live here. Matching
thresholds and department labels live in orgmatch.config instead.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables or a .env file.

    All settings have defaults suitable for local runs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # === Inputs ===
    config_path: str = Field(
        default="",
        alias="ORGMATCH_CONFIG_PATH",
        description="JSON config file with identity.* / matching.* / directory.* keys",
    )
    org_chart_path: str = Field(
        default="data/org_chart.json",
        alias="ORGMATCH_ORG_CHART_PATH",
        description="Org hierarchy export (JSON)",
    )
    alias_path: str = Field(
        default="data/email_aliases.json",
        alias="ORGMATCH_ALIAS_PATH",
        description="Alias table file used when the file backend is selected",
    )

    # === Alias backend ===
    alias_backend: str = Field(
        default="file",
        alias="ORGMATCH_ALIAS_BACKEND",
        description="Where the alias table lives: 'file' or 'pocketbase'",
    )
    alias_collection: str = Field(
        default="identity_aliases",
        alias="ORGMATCH_ALIAS_COLLECTION",
        description="PocketBase collection holding alias records",
    )

    # === PocketBase Configuration ===
    pocketbase_url: str = Field(
        default="http://127.0.0.1:8090",
        description="PocketBase server URL",
    )
    pocketbase_admin_email: str = Field(
        default="",
        description="PocketBase admin email for API authentication",
    )
    pocketbase_admin_password: str = Field(
        default="",
        description="PocketBase admin password",
    )

    # === Logging ===
    log_level: str = Field(
        default="INFO",
        description="TRACE, DEBUG, INFO, WARNING or ERROR",
    )

    @field_validator("alias_backend", mode="after")
    @classmethod
    def validate_alias_backend(cls, v: str) -> str:
        """Validate and normalize alias_backend."""
        v = v.lower()
        if v not in ("file", "pocketbase"):
            raise ValueError(f"Invalid ORGMATCH_ALIAS_BACKEND: {v}. Must be 'file' or 'pocketbase'")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    """
    return Settings()
