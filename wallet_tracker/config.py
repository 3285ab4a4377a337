"""Runtime configuration, read from the environment or a .env file."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rules import DEFAULT_HTTP_TIMEOUT, ETHERSCAN_BASE_URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    etherscan_api_key: str = Field(..., description="Etherscan API key")
    etherscan_base_url: str = Field(default=ETHERSCAN_BASE_URL, description="Etherscan API base URL")
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0, description="Upstream request timeout in seconds")

    host: str = Field(default="0.0.0.0", description="HTTP server host")
    port: int = Field(default=8080, description="HTTP server port")

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("etherscan_api_key")
    @classmethod
    def _api_key_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("ETHERSCAN_API_KEY must not be empty")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
