import os
from collections.abc import Mapping
from datetime import timedelta

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CACHE_EXPIRATION_MINUTES = 5
DEFAULT_RETRY_COUNT = 3


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # User directory API
    base_url: str = Field(default="https://reqres.in/api", alias="USER_SERVICE_BASE_URL")
    api_key: str = Field(default="reqres-free-v1", alias="USER_SERVICE_API_KEY")
    request_timeout: float = Field(
        default=30.0, gt=0, alias="USER_SERVICE_REQUEST_TIMEOUT"
    )

    # Resilience
    cache_expiration_minutes: int = Field(
        default=DEFAULT_CACHE_EXPIRATION_MINUTES,
        ge=0,
        alias="USER_SERVICE_CACHE_EXPIRATION_MINUTES",
    )
    retry_count: int = Field(
        default=DEFAULT_RETRY_COUNT, ge=0, alias="USER_SERVICE_RETRY_COUNT"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(minutes=self.cache_expiration_minutes)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from environment variables (and a .env file, if any)."""
    if environ is None:
        load_dotenv()
        environ = os.environ
    return Settings.model_validate(dict(environ))
