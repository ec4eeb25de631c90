"""Application configuration via Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIN_JWT_KEY_LENGTH = 16


def _empty_str_to_default_bool(v: str | bool | None, default: bool) -> bool:
    """Convert empty strings to default bool value."""
    if v == "" or v is None:
        return default
    if isinstance(v, bool):
        return v
    return v.lower() in {"true", "1", "yes", "on"}


def _empty_str_to_default_float(v: str | float | None, default: float) -> float:
    """Convert empty strings to default float value."""
    if v == "" or v is None:
        return default
    if isinstance(v, float):
        return v
    return float(v)


class ConfigurationError(RuntimeError):
    """Raised when gateway configuration is invalid."""


class GatewaySettings(BaseSettings):
    """Global Site Selector settings shared by every node of the federation."""

    model_config = SettingsConfigDict(
        env_prefix="GSS_",
        extra="ignore",
    )

    mode: Literal["master", "slave"] = "master"
    jwt_key: str = ""
    master_admin: str = ""
    saml_slave_mapping: str = ""

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode(cls, v: str | None) -> str:
        if v is None or v == "":
            return "master"
        return v.lower()

    @property
    def master_admins(self) -> list[str]:
        """Return the uids allowed to log in on the master node itself."""
        return [uid.strip() for uid in self.master_admin.split(",") if uid.strip()]


class LookupSettings(BaseSettings):
    """Connection settings for the user lookup server."""

    model_config = SettingsConfigDict(
        env_prefix="GSS_LOOKUP_",
        extra="ignore",
    )

    server_url: str | None = None
    timeout: float = 10.0
    verify_ssl: bool = True

    @field_validator("server_url", mode="before")
    @classmethod
    def handle_empty_url(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return v.rstrip("/")

    @field_validator("timeout", mode="before")
    @classmethod
    def handle_empty_timeout(cls, v: str | float | None) -> float:
        return _empty_str_to_default_float(v, default=10.0)

    @field_validator("verify_ssl", mode="before")
    @classmethod
    def handle_empty_verify(cls, v: str | bool | None) -> bool:
        return _empty_str_to_default_bool(v, default=True)

    @property
    def is_configured(self) -> bool:
        """Return True if a lookup server URL is set."""
        return bool(self.server_url)


class AppTokenSettings(BaseSettings):
    """Outbound settings for minting app tokens on the target node."""

    model_config = SettingsConfigDict(
        env_prefix="GSS_APP_TOKEN_",
        extra="ignore",
    )

    timeout: float = 10.0
    verify_ssl: bool = True

    @field_validator("timeout", mode="before")
    @classmethod
    def handle_empty_timeout(cls, v: str | float | None) -> float:
        return _empty_str_to_default_float(v, default=10.0)

    @field_validator("verify_ssl", mode="before")
    @classmethod
    def handle_empty_verify(cls, v: str | bool | None) -> bool:
        return _empty_str_to_default_bool(v, default=True)


class ServerSettings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    workers: int = 1
    log_level: str = "info"


class Settings(BaseSettings):
    """Aggregate configuration for the gateway."""

    model_config = SettingsConfigDict(extra="ignore")

    gss: GatewaySettings = Field(default_factory=GatewaySettings)
    lookup: LookupSettings = Field(default_factory=LookupSettings)
    app_token: AppTokenSettings = Field(default_factory=AppTokenSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @model_validator(mode="after")
    def validate_master_secret(self) -> "Settings":
        """Require a usable shared secret when running as master."""
        if self.gss.mode == "master":
            if not self.gss.jwt_key:
                raise ConfigurationError(
                    "Master mode requires the shared signing secret. "
                    "Set GSS_JWT_KEY."
                )
            if len(self.gss.jwt_key) < MIN_JWT_KEY_LENGTH:
                raise ConfigurationError(
                    f"GSS_JWT_KEY must be at least {MIN_JWT_KEY_LENGTH} characters."
                )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Force settings cache to reload from environment."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "AppTokenSettings",
    "ConfigurationError",
    "GatewaySettings",
    "LookupSettings",
    "MIN_JWT_KEY_LENGTH",
    "ServerSettings",
    "Settings",
    "get_settings",
    "reload_settings",
]
