# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

THIRTY_DAYS_SECONDS = 60 * 60 * 24 * 30


class Settings(BaseSettings):
    """Runtime configuration, built once at startup and passed to create_app().

    Read from ``MYSHOP_*`` variables (or ``.env``); the secret also accepts
    ``AUTH_SECRET``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MYSHOP_",
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    secret_key: str = Field(
        min_length=1,
        validation_alias=AliasChoices("MYSHOP_SECRET_KEY", "AUTH_SECRET"),
    )
    database_url: str = "sqlite:///./myshop.db"
    environment: str = Field(default="development", validation_alias=AliasChoices("MYSHOP_ENV"))
    session_max_age: int = THIRTY_DAYS_SECONDS
    retry_attempts: int = Field(
        default=3,
        ge=1,
        validation_alias=AliasChoices("MYSHOP_DB_RETRY_ATTEMPTS"),
    )
    retry_base_delay_ms: int = Field(
        default=250,
        ge=0,
        validation_alias=AliasChoices("MYSHOP_DB_RETRY_BASE_DELAY_MS"),
    )
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def cookie_secure(self) -> bool:
        return self.is_production
