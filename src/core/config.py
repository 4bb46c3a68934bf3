"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    data_dir: Path = Field(default=Path("data"), validation_alias="PLANTPILOT_DATA_DIR")

    intake_cap: int = Field(default=200, ge=1, validation_alias="PLANTPILOT_INTAKE_CAP")
    chat_cap: int = Field(default=200, ge=1, validation_alias="PLANTPILOT_CHAT_CAP")
    sop_cap: int = Field(default=1000, ge=1, validation_alias="PLANTPILOT_SOP_CAP")
    entitlement_cap: int = Field(
        default=5000, ge=1, validation_alias="PLANTPILOT_ENTITLEMENT_CAP"
    )
    royalty_cap: int = Field(default=5000, ge=1, validation_alias="PLANTPILOT_ROYALTY_CAP")

    list_default_limit: int = Field(
        default=20, ge=1, validation_alias="PLANTPILOT_LIST_DEFAULT_LIMIT"
    )
    list_max_limit: int = Field(default=50, ge=1, validation_alias="PLANTPILOT_LIST_MAX_LIMIT")

    anonymous_user_id: str = Field(
        default="anonymous", min_length=1, validation_alias="PLANTPILOT_ANONYMOUS_USER"
    )
    catalog_path: Path | None = Field(default=None, validation_alias="PLANTPILOT_CATALOG_PATH")

    cors_origin: str | None = Field(default=None, validation_alias="CORS_ORIGIN")
    rate_limit: str = Field(default="120/minute", validation_alias="PLANTPILOT_RATE_LIMIT")
    rate_limit_enabled: bool = Field(
        default=True, validation_alias="PLANTPILOT_RATE_LIMIT_ENABLED"
    )

    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=8789, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def cors_origins(self) -> list[str]:
        """Comma-separated CORS_ORIGIN as a list; empty means any origin."""
        if not self.cors_origin:
            return []
        return [origin.strip() for origin in self.cors_origin.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["Settings", "get_settings"]
