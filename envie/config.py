"""Library settings, read from ENVIE_* process environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ENVIE_", extra="ignore")

    env_filename: str = Field(default=".env", min_length=1)
    encoding: str = "utf-8"
    file_mode: int = Field(default=0o600, ge=0, le=0o777)

    # Raise ParseError on the first malformed line instead of skipping it
    strict_parsing: bool = False
    # Also write environment fill-ins back to the file on every mutation
    persist_environment: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
