"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TenantManagementSettings(BaseSettings):
    """Tenant activation settings.

    Environment variables:
        CUSTOS_TENANT_MANAGEMENT_SYSTEM_ACTOR: Actor recorded for pipeline-driven changes (default: system)
        CUSTOS_TENANT_MANAGEMENT_DEFAULT_REGISTRATION_COMMENT: Comment used when a tenant has none (default: Created by custos)
        CUSTOS_TENANT_MANAGEMENT_FEDERATED_REGISTRATION_ENABLED: Register a federation client on first activation (default: false)
        CUSTOS_TENANT_MANAGEMENT_BROKER_ALIAS: Identity broker alias in the realm redirect URI (default: oidc)
    """

    model_config = SettingsConfigDict(
        env_prefix="CUSTOS_TENANT_MANAGEMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system_actor: str = Field(
        default="system",
        description="Actor recorded for pipeline-driven changes",
        min_length=1,
    )
    default_registration_comment: str = Field(
        default="Created by custos",
        description="Registration comment used when a tenant has none",
        min_length=1,
    )
    federated_registration_enabled: bool = Field(
        default=False,
        description=(
            "Register a federation client, store its credential and configure "
            "the federated IdP on first activation"
        ),
    )
    broker_alias: str = Field(
        default="oidc",
        description="Identity broker alias in the realm redirect URI",
    )

    @field_validator("broker_alias")
    @classmethod
    def validate_broker_alias(cls, value: str) -> str:
        """Broker alias must be a single non-empty path segment."""
        value = value.strip()
        if not value or "/" in value:
            raise ValueError(
                f"broker_alias must be a single path segment, got {value!r}"
            )
        return value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(
        default="Custos Tenant Management", description="Application name"
    )
    log_level: str = Field(default="INFO", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Log level must be a standard logging level name."""
        name = value.upper()
        if name not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return name

    @property
    def tenant_management(self) -> TenantManagementSettings:
        """Get tenant management settings."""
        return get_tenant_management_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_tenant_management_settings() -> TenantManagementSettings:
    """Get cached tenant management settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return TenantManagementSettings()
