"""
Google OAuth utilities.

These helpers drive the server-to-server half of the authorization-code grant:
building the consent URL, trading a code for tokens and resolving the
identity behind the resulting bearer token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urlencode

import anyio
import httpx
from fastapi import status
from pydantic import ValidationError

from oauth_callback.core.config import GoogleSettings
from oauth_callback.models.oauth import IdentityInfo, TokenExchangeResult


class OAuthTokenExchangeError(Exception):
    """Raised when the token endpoint does not yield an access token."""


class OAuthUserInfoError(Exception):
    """Raised when the identity endpoint does not yield a usable profile."""


def _provider_error_code(response: httpx.Response) -> str:
    """Return Google's ``error`` field, if any, without echoing the full body."""
    try:
        payload = response.json()
    except ValueError:
        return "unparseable body"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            error = error.get("status") or error.get("message")
        if error:
            return str(error)
    return "no error code"


class GoogleOAuthClient:
    """Build Google authorization URLs and complete authorization-code exchanges."""

    def __init__(
        self,
        google_settings: GoogleSettings,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._google = google_settings
        self._timeout = timeout
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        # httpx applies the timeout per phase; callers also cap the whole call.
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def build_authorization_url(
        self, state: Optional[str] = None, access_type: str = "offline"
    ) -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "response_type": "code",
            "client_id": self._google.client_id,
            "redirect_uri": self._google.redirect_uri,
            "scope": " ".join(self._google.scopes),
            "access_type": access_type,
            "prompt": "consent",
        }
        if state:
            params["state"] = state
        return f"{self._google.auth_base_url}?{urlencode(params)}"

    async def exchange_authorization_code(self, code: str) -> TokenExchangeResult:
        """
        Exchange an authorization code for tokens.

        Codes are single-use: Google answers a replayed code with
        ``400 invalid_grant``, which surfaces here like any other rejection.
        """
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret.get_secret_value(),
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self._google.redirect_uri,
        }

        try:
            with anyio.fail_after(self._timeout):
                async with self._http() as client:
                    response = await client.post(self._google.token_url, data=payload)
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise OAuthTokenExchangeError(
                f"Token endpoint timed out after {self._timeout}s."
            ) from exc
        except httpx.HTTPError as exc:
            raise OAuthTokenExchangeError(
                f"Token endpoint unreachable: {type(exc).__name__}."
            ) from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthTokenExchangeError(
                f"Token endpoint returned {response.status_code} "
                f"({_provider_error_code(response)})."
            )

        try:
            token_payload: Dict[str, Any] = response.json()
            return TokenExchangeResult.model_validate(token_payload)
        except (ValueError, ValidationError) as exc:
            raise OAuthTokenExchangeError(
                "Token payload returned from Google has no access token."
            ) from exc

    async def fetch_user_info(self, access_token: str) -> IdentityInfo:
        """Resolve the profile of the user who granted ``access_token``."""
        headers = {"Authorization": f"Bearer {access_token}"}

        try:
            with anyio.fail_after(self._timeout):
                async with self._http() as client:
                    response = await client.get(
                        self._google.userinfo_url, headers=headers
                    )
        except TimeoutError as exc:
            raise OAuthUserInfoError(
                f"Identity endpoint timed out after {self._timeout}s."
            ) from exc
        except httpx.HTTPError as exc:
            raise OAuthUserInfoError(
                f"Identity endpoint unreachable: {type(exc).__name__}."
            ) from exc

        if response.status_code != status.HTTP_200_OK:
            raise OAuthUserInfoError(
                f"Identity endpoint returned {response.status_code} "
                f"({_provider_error_code(response)})."
            )

        try:
            return IdentityInfo.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise OAuthUserInfoError(
                "Identity payload returned from Google is missing an email."
            ) from exc


__all__ = [
    "GoogleOAuthClient",
    "OAuthTokenExchangeError",
    "OAuthUserInfoError",
]
