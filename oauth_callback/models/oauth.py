"""
Domain models for a single pass through the authorization-code callback.

None of these values outlive the request that created them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TokenExchangeResult(BaseModel):
    """Token endpoint response; only the access token is required."""

    model_config = ConfigDict(extra="ignore")

    access_token: str = Field(..., min_length=1, repr=False)
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    refresh_token: Optional[str] = Field(None, repr=False)
    id_token: Optional[str] = Field(None, repr=False)


class IdentityInfo(BaseModel):
    """Authenticated user profile returned by the identity endpoint."""

    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )

    email: str = Field(..., min_length=1)
    subject: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("id", "sub", "subject"),
        description="Opaque provider subject identifier.",
    )
    name: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None
    verified_email: Optional[bool] = None


class FailureReason(str, Enum):
    """Terminal failure kinds, valued by the ``error`` code the host app reads."""

    PROVIDER_ERROR = "oauth_error"
    MISSING_CODE = "no_code"
    TOKEN_EXCHANGE_FAILED = "token_exchange_failed"
    IDENTITY_FETCH_FAILED = "user_info_failed"
    INTERNAL_ERROR = "callback_error"


@dataclass(frozen=True, slots=True)
class CallbackOutcome:
    """Either a resolved identity or a failure reason, never both."""

    identity: Optional[IdentityInfo] = None
    reason: Optional[FailureReason] = None

    def __post_init__(self) -> None:
        if (self.identity is None) == (self.reason is None):
            raise ValueError("CallbackOutcome needs exactly one of identity or reason.")

    @classmethod
    def success(cls, identity: IdentityInfo) -> "CallbackOutcome":
        return cls(identity=identity)

    @classmethod
    def failure(cls, reason: FailureReason) -> "CallbackOutcome":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.identity is not None


__all__ = [
    "CallbackOutcome",
    "FailureReason",
    "IdentityInfo",
    "TokenExchangeResult",
]
