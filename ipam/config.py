"""
IPAM Configuration

Settings for the IPAM service
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """IPAM Settings"""

    # Service
    service_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 4040

    # Storage
    storage_backend: Literal["postgres", "memory"] = "postgres"
    database_url: str | None = Field(
        default=None, validation_alias=AliasChoices("database_url", "db_conn")
    )

    # Authentication (OIDC / Keycloak)
    auth_enabled: bool = False
    auth_issuer: str | None = Field(
        default=None, validation_alias=AliasChoices("auth_issuer", "keycloak_issuer")
    )
    auth_audience: str | None = Field(
        default=None, validation_alias=AliasChoices("auth_audience", "keycloak_audience")
    )
    auth_jwks_url: str | None = Field(
        default=None, validation_alias=AliasChoices("auth_jwks_url", "keycloak_jwks_url")
    )
    jwks_probe_timeout: float = 10.0  # seconds
    jwks_refresh_interval: float = 3600.0  # seconds

    # Lifecycle
    shutdown_grace_period: int = 5  # seconds

    # CORS
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
