"""
Application configuration using Pydantic settings.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Server
    host: str = "0.0.0.0"
    port: int = 4001
    cors_origins: str = "*"  # comma separated
    log_level: str = "INFO"

    # Fleet
    flight_count: int = 20
    callsign_prefix: str = "CC"
    random_seed: Optional[int] = None  # fixed seed gives a reproducible fleet

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
