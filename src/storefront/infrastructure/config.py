"""Application settings loaded from the environment (``STOREFRONT_*``) or ``.env``."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = Field(default="sqlite:///data/storefront.db")
    # Echo every SQL statement through the sqlalchemy.engine logger.
    echo_sql: bool = False
    log_level: str = "info"
    log_json: bool = False
    page_size: int = Field(default=20, ge=1, le=500)
