"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Iterable, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .classification import DEFAULT_STATIC_SERIES_IDS

DEFAULT_SAMPLE_DATA_PATH = Path(__file__).resolve().parent / "data" / "sample-series.json"


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="AniVerse", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=4000, alias="PORT")

    store_url: str | None = Field(
        default=None,
        alias="SUPABASE_URL",
        validation_alias=AliasChoices("SUPABASE_URL", "STORE_URL"),
    )
    store_key: str | None = Field(
        default=None,
        alias="SUPABASE_ANON_KEY",
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "STORE_KEY"),
    )
    store_timeout_seconds: float = Field(
        default=15.0, alias="STORE_TIMEOUT", gt=0, le=120
    )

    sample_data_path: Path = Field(
        default=DEFAULT_SAMPLE_DATA_PATH, alias="SAMPLE_DATA_PATH"
    )
    static_series_ids: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_STATIC_SERIES_IDS, alias="STATIC_SERIES_IDS"
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("store_url", "store_key", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value

    @field_validator("static_series_ids", mode="before")
    @classmethod
    def _parse_static_series_ids(cls, value: object) -> tuple[str, ...]:
        """Normalise the static series allow-list from environment values."""

        if value is None:
            return DEFAULT_STATIC_SERIES_IDS
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise ValueError("STATIC_SERIES_IDS must be a string or iterable of strings")

        cleaned: list[str] = []
        for entry in raw_values:
            # Document ids are matched exactly, so case is preserved.
            if entry and entry not in cleaned:
                cleaned.append(entry)
        if not cleaned:
            return DEFAULT_STATIC_SERIES_IDS
        return tuple(cleaned)

    @property
    def store_configured(self) -> bool:
        """Return whether both relational store connection values are present."""

        return bool(self.store_url and self.store_key)

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
