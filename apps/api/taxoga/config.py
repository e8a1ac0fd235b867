from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Taxoga Tax Calculator API"
    app_env: str = "development"
    app_debug: bool = True
    log_level: str = "INFO"

    taxoga_api_base_url: str = Field(default="https://api.taxoga.com/public")
    upstream_timeout_seconds: float = 15.0

    # "local" allocates personal income against the schedule below;
    # "remote" asks the Taxoga PAYE calculator for the band breakdown.
    bracket_mode: Literal["local", "remote"] = "local"
    personal_schedule_file: str | None = None

    catalog_mode: Literal["remote", "snapshot"] = "remote"
    reference_snapshot_file: str | None = None
    reference_cache_ttl_seconds: int = 600

    cors_origins: str = "http://localhost:3000"


@lru_cache
def get_settings() -> Settings:
    return Settings()
