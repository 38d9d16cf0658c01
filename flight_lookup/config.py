from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DEFAULT_STORAGE_PATH = Path.home() / ".flight_lookup" / "storage.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(populate_by_name=True)

    api_base_url: str = Field(
        "http://api.aviationstack.com/v1", alias="FLIGHT_API_BASE_URL"
    )
    relay_url: str = Field("https://api.allorigins.win/raw", alias="FLIGHT_RELAY_URL")
    mock_delay_s: float = Field(1.5, alias="FLIGHT_MOCK_DELAY_S")
    request_timeout_s: Optional[float] = Field(None, alias="FLIGHT_REQUEST_TIMEOUT_S")
    storage_path: Path = Field(DEFAULT_STORAGE_PATH, alias="FLIGHT_STORAGE_PATH")
    log_file: Optional[Path] = Field(None, alias="FLIGHT_LOG_FILE")
    log_level: str = Field("INFO", alias="FLIGHT_LOG_LEVEL")

    @field_validator("mock_delay_s")
    @classmethod
    def _delay_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("FLIGHT_MOCK_DELAY_S must not be negative")
        return v

    @field_validator("request_timeout_s")
    @classmethod
    def _timeout_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("FLIGHT_REQUEST_TIMEOUT_S must be greater than 0")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return application settings loaded from the environment."""
    return Settings()


__all__ = ["Settings", "get_settings"]
