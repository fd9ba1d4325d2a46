"""Allocator settings loaded from environment variables."""

from functools import lru_cache
from ipaddress import IPv4Address
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global settings container."""

    model_config = SettingsConfigDict(env_prefix="ADDRGEN_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "json"
    log_file_path: str = ""

    test_mode: bool = False
    default_base_address: str = "0.0.0.1"

    @field_validator("default_base_address", mode="before")
    @classmethod
    def normalize_base_address(cls, value: str) -> str:
        return str(IPv4Address(str(value).strip()))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
