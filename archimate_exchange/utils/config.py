"""Application configuration.

Defaults for exported models and the CLI, overridable from .env or the environment.
"""
from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from .env and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    default_model_name: str = "ArchiMate Model"
    default_view_name: str = "ArchiMate View"
    default_color_theme: str = Field(
        default="archimate",
        validation_alias=AliasChoices("ARCHIMATE_COLOR_THEME", "DEFAULT_COLOR_THEME"),
    )
    output_dir: str = "outputs"
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("ARCHIMATE_LOG_LEVEL", "LOG_LEVEL"),
    )


settings = Settings()
