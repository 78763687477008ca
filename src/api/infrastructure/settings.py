"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings for the media metadata store.

    Environment variables:
        CHRONONAGRAM_DB_HOST: Database host (default: localhost)
        CHRONONAGRAM_DB_PORT: Database port (default: 5432)
        CHRONONAGRAM_DB_DATABASE: Database name (default: chrononagram)
        CHRONONAGRAM_DB_USERNAME: Database user (default: chrononagram)
        CHRONONAGRAM_DB_PASSWORD: Database password (required in production)
        CHRONONAGRAM_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        CHRONONAGRAM_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONONAGRAM_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="chrononagram", description="Database name")
    username: str = Field(default="chrononagram", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AccessSettings(BaseSettings):
    """Upstream access gateway settings.

    Environment variables:
        CHRONONAGRAM_ACCESS_ISSUER: Expected assertion issuer. The literal
            value "dev" enables the development identity bypass.
        CHRONONAGRAM_ACCESS_DEV_CLIENT_ID: Caller id that is authorized for
            every tenant without consulting the directory (development only).
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONONAGRAM_ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    issuer: str = Field(
        default="dev",
        description="Expected issuer of upstream access assertions",
    )
    dev_client_id: str | None = Field(
        default=None,
        description="Development caller id that bypasses tenant allowlists",
    )


class TenancySettings(BaseSettings):
    """Tenant directory settings.

    The directory is a Workers KV namespace read over the Cloudflare REST API.

    Environment variables:
        CHRONONAGRAM_TENANCY_DEV_USER: Tenant served on loopback hosts
        CHRONONAGRAM_TENANCY_ACCOUNT_ID: Cloudflare account id
        CHRONONAGRAM_TENANCY_NAMESPACE_ID: KV namespace id
        CHRONONAGRAM_TENANCY_API_TOKEN: API token with KV read access
        CHRONONAGRAM_TENANCY_CACHE_TTL_SECONDS: Directory cache TTL (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONONAGRAM_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    dev_user: str | None = Field(
        default=None,
        description="Tenant username served on development hosts",
    )
    account_id: str = Field(default="", description="Cloudflare account id")
    namespace_id: str = Field(default="", description="KV namespace id")
    api_token: SecretStr = Field(
        default=SecretStr(""),
        description="Cloudflare API token with KV read access",
    )
    api_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Cloudflare REST API base URL",
    )
    cache_ttl_seconds: float = Field(
        default=30.0,
        description="Lifetime of cached directory reads",
        ge=0,
        le=3600,
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for directory requests",
        gt=0,
    )


class ImagesSettings(BaseSettings):
    """External blob store (Cloudflare Images) settings.

    Environment variables:
        CHRONONAGRAM_IMAGES_ACCOUNT_ID: Cloudflare account id
        CHRONONAGRAM_IMAGES_API_TOKEN: API token with Images write access
    """

    model_config = SettingsConfigDict(
        env_prefix="CHRONONAGRAM_IMAGES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    account_id: str = Field(default="", description="Cloudflare account id")
    api_token: SecretStr = Field(
        default=SecretStr(""),
        description="Cloudflare API token with Images access",
    )
    api_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Cloudflare REST API base URL",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for blob store requests",
        gt=0,
    )


class Settings(BaseSettings):
    """Application-wide settings (DEBUG, LOG_LEVEL, APP_NAME)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Chrononagram API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode (forces DEBUG logs)")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level",
    )

    @property
    def effective_log_level(self) -> str:
        """Log level after applying ``debug``."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_access_settings() -> AccessSettings:
    """Get cached access gateway settings."""
    return AccessSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenant directory settings."""
    return TenancySettings()


@lru_cache
def get_images_settings() -> ImagesSettings:
    """Get cached blob store settings."""
    return ImagesSettings()
