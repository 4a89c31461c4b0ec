"""
Application configuration models and helpers.

Centralizes settings for the OAuth callback listener so the FastAPI app, the
uvicorn entrypoint and the preflight script share one configuration surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

import os

from pydantic import Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        os.environ[key] = value.strip().strip('"').strip("'")


_load_env_file()


def _split_csv(value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
    if isinstance(value, (tuple, list)):
        return tuple(value)
    return tuple(item.strip() for item in value.split(",") if item.strip())


class GoogleSettings(BaseSettings):
    """Credentials and endpoints for the Google authorization-code grant."""

    model_config = SettingsConfigDict(extra="ignore")

    client_id: str = Field(..., validation_alias="GOOGLE_CLIENT_ID")
    client_secret: SecretStr = Field(..., validation_alias="GOOGLE_CLIENT_SECRET")
    redirect_uri: str = Field(
        ...,
        validation_alias="GOOGLE_REDIRECT_URI",
        description="Must match the URI registered with Google byte for byte.",
    )
    auth_base_url: str = Field(
        "https://accounts.google.com/o/oauth2/v2/auth",
        validation_alias="GOOGLE_AUTH_URL",
    )
    token_url: str = Field(
        "https://oauth2.googleapis.com/token", validation_alias="GOOGLE_TOKEN_URL"
    )
    userinfo_url: str = Field(
        "https://www.googleapis.com/oauth2/v2/userinfo",
        validation_alias="GOOGLE_USERINFO_URL",
    )
    scopes: Annotated[tuple[str, ...], NoDecode] = Field(
        ("openid", "email", "profile"), validation_alias="OAUTH_SCOPES"
    )

    @field_validator("client_secret", mode="before")
    @classmethod
    def _strip_secret(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("redirect_uri")
    @classmethod
    def _require_absolute_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("redirect URI must be an absolute http(s) URL")
        return value

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing scopes as a comma-separated string."""
        return _split_csv(value)


class ServerSettings(BaseSettings):
    """Where the dedicated callback listener binds."""

    model_config = SettingsConfigDict(extra="ignore")

    host: str = Field("0.0.0.0", validation_alias="OAUTH_CALLBACK_HOST")
    port: int = Field(5001, validation_alias="OAUTH_CALLBACK_PORT")


class AppSettings(BaseSettings):
    """Root settings object for the callback service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    frontend_base_url: HttpUrl = Field(
        "https://staarkids.org/",
        validation_alias="FRONTEND_BASE_URL",
        description="Host application URL that receives the outcome redirect.",
    )
    http_timeout_seconds: float = Field(10.0, validation_alias="OAUTH_HTTP_TIMEOUT")
    cors_allow_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        ("*",), validation_alias="CORS_ALLOW_ORIGINS"
    )
    google: GoogleSettings = Field(default_factory=GoogleSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        return _split_csv(value)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "GoogleSettings",
    "ServerSettings",
    "get_settings",
]
