# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Environment-driven settings (``.env`` is read when present)."""

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_DEV_JWT_SECRET = "dev-only-jwt-secret-change-me-0123456789abcdef"
_WEAK_SECRETS = frozenset({_DEV_JWT_SECRET, "", "dev", "development", "secret", "test"})
_TRUTHY = frozenset({"1", "true", "yes", "on"})

CsvList = Annotated[list[str], NoDecode]


def _split_csv(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _as_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class _EnvSection(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_by_name=True)


class DatabaseConfig(_EnvSection):
    url: str = Field("sqlite:///todoapp.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")


class JwtConfig(_EnvSection):
    secret: str = Field(_DEV_JWT_SECRET, alias="JWT_SECRET")
    issuer: str = Field("todoapp", alias="JWT_ISSUER")
    # access tokens have a fixed 15 minute lifetime
    refresh_expiration_ms: int = Field(604_800_000, ge=1000, alias="JWT_REFRESH_EXPIRATION_MS")


class AuthConfig(_EnvSection):
    default_role: str = Field("ROLE_USER", alias="DEFAULT_ROLE")
    seed_roles: CsvList = Field(["ROLE_USER", "ROLE_ADMIN"], alias="SEED_ROLES")

    @field_validator("seed_roles", mode="before")
    @classmethod
    def _parse_roles(cls, value: str | list[str]) -> list[str]:
        return _split_csv(value)


class SecurityConfig(_EnvSection):
    allowed_origins: CsvList = Field(["http://localhost:3000"], alias="ALLOWED_ORIGINS")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        return _split_csv(value)

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_hsts(cls, value: str | bool) -> bool:
        return _as_bool(value)


class AppConfig(_EnvSection):
    app_env: str = Field("development", alias="APP_ENV")
    service_name: str = Field("todoapp-backend", alias="SERVICE_NAME")
    service_version: str = Field("1.0.0", alias="SERVICE_VERSION")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    jwt: JwtConfig = Field(default_factory=JwtConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug(cls, value: str | bool) -> bool:
        return _as_bool(value)

    @model_validator(mode="after")
    def _refuse_insecure_production(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.jwt.secret in _WEAK_SECRETS:
            print(
                "FATAL: JWT_SECRET is unset or a development value while APP_ENV=production.\n"
                "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(48))\"",
                file=sys.stderr,
            )
            sys.exit(1)

        if len(self.jwt.secret.encode()) < 32:
            print("WARNING: JWT_SECRET is shorter than 32 bytes", file=sys.stderr)
        if "*" in self.security.allowed_origins:
            print("WARNING: ALLOWED_ORIGINS contains '*'", file=sys.stderr)
        if not self.security.enable_hsts:
            print("WARNING: ENABLE_HSTS is off", file=sys.stderr)
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "JwtConfig",
    "SecurityConfig",
    "load_config",
]
