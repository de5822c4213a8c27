# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiConfig(BaseSettings):
    base_url: str = Field("http://localhost:5000", alias="API_URL")
    prefix: str = Field("/api", alias="API_PREFIX")
    timeout: float = Field(30.0, gt=0, alias="API_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")

    @field_validator("base_url", mode="after")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def root(self) -> str:
        return f"{self.base_url}{self.prefix}"


class SessionConfig(BaseSettings):
    storage_file: Path = Field(Path("instance/session.json"), alias="SESSION_FILE")
    preferences_file: Path = Field(Path("instance/preferences.json"), alias="PREFERENCES_FILE")
    token_key: str = Field("token", min_length=1, alias="SESSION_TOKEN_KEY")
    user_key: str = Field("user", min_length=1, alias="SESSION_USER_KEY")
    login_route: str = Field("/login", alias="LOGIN_ROUTE")
    home_route: str = Field("/dashboard", alias="HOME_ROUTE")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")


class NotificationConfig(BaseSettings):
    success_ms: int = Field(3000, ge=0, alias="TOAST_SUCCESS_MS")
    error_ms: int = Field(5000, ge=0, alias="TOAST_ERROR_MS")
    info_ms: int = Field(3000, ge=0, alias="TOAST_INFO_MS")
    warning_ms: int = Field(4000, ge=0, alias="TOAST_WARNING_MS")
    # progress bar sampling
    tick_ms: int = Field(50, ge=1, le=50, alias="TOAST_TICK_MS")
    exit_ms: int = Field(300, ge=0, alias="TOAST_EXIT_MS")

    model_config = SettingsConfigDict(env_file=".env", validate_by_name=True, extra="ignore")

    def default_durations(self) -> dict[str, int]:
        return {
            "success": self.success_ms,
            "error": self.error_ms,
            "info": self.info_ms,
            "warning": self.warning_ms,
        }


def _api_config_factory() -> ApiConfig:
    return ApiConfig()  # type: ignore[call-arg]


def _session_config_factory() -> SessionConfig:
    return SessionConfig()  # type: ignore[call-arg]


def _notification_config_factory() -> NotificationConfig:
    return NotificationConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    shop_name: str = Field("MediStore", alias="SHOP_NAME")
    app_title: str = Field("MediStore - Billing Software", alias="APP_TITLE")

    api: ApiConfig = Field(default_factory=_api_config_factory)
    session: SessionConfig = Field(default_factory=_session_config_factory)
    notifications: NotificationConfig = Field(default_factory=_notification_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "ApiConfig",
    "AppConfig",
    "NotificationConfig",
    "SessionConfig",
    "load_config",
]
