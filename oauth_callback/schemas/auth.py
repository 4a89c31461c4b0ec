"""Schemas related to the OAuth callback surface."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CallbackQuery(BaseModel):
    """Query parameters Google appends when redirecting back to the callback."""

    code: Optional[str] = Field(None, description="Single-use authorization code.")
    error: Optional[str] = Field(None, description="Provider failure reason.")
    error_description: Optional[str] = Field(None)
    state: Optional[str] = Field(None, description="Opaque state echoed by Google.")

    @field_validator("code", "error", "error_description", "state", mode="before")
    @classmethod
    def _blank_as_missing(cls, value: Optional[str]) -> Optional[str]:
        if value == "":
            return None
        return value


class HealthStatus(BaseModel):
    status: str = "ok"
    service: str = "oauth-callback"


__all__ = ["CallbackQuery", "HealthStatus"]
