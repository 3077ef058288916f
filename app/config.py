# app/config.py
"""Application configuration, read from the environment and an optional .env file."""

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_KEY = "supersecretkey123"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Shared secret checked on every /products route. Override in any real deployment.
    api_key: str = DEFAULT_API_KEY

    # "development" adds the stack trace to error responses; NODE_ENV is honoured too
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("environment", "node_env"),
    )

    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 3000

    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"
    log_format: str = "text"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def uses_default_api_key(self) -> bool:
        return self.api_key == DEFAULT_API_KEY


@lru_cache
def get_settings() -> Settings:
    return Settings()
