"""
jobly.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me-0123456789abcdef"


class Settings(BaseSettings):
    """
    Signing secret and hashing cost are read once at startup and treated as
    immutable for the process lifetime.
    """

    model_config = SettingsConfigDict(env_prefix="JOBLY_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "jobly"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3001

    # Auth
    jwt_alg: str = "HS256"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)
    # None keeps tokens valid until the secret changes.
    token_ttl_minutes: int | None = Field(default=None, ge=1)
    bcrypt_rounds: int = Field(default=14, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./jobly.db"

    @model_validator(mode="after")
    def _reject_dev_secret_in_prod(self) -> Settings:
        if self.env == "prod" and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("JOBLY_JWT_SECRET must be set in prod")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Hasher and token codec are built from these values in `api.app.create_app`;
# nothing else should read the secret directly.
