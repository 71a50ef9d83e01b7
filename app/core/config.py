"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_title: str = Field(default="Movie and Actor API", alias="APP_TITLE")
    database_url: str = Field(default="sqlite://", alias="DATABASE_URL")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # An actor may only be linked to one movie at a time when enabled.
    exclusive_actor_assignment: bool = Field(default=False, alias="EXCLUSIVE_ACTOR_ASSIGNMENT")
    # PUT bodies may omit fields (which keep their values) when enabled.
    partial_updates: bool = Field(default=False, alias="PARTIAL_UPDATES")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
