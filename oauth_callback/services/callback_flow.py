"""
Authorization-code callback flow.

Drives one callback request from the provider redirect to the outcome redirect
handed back to the host application:

    received -> provider error | code missing | exchanging
    exchanging -> exchange failed | fetching identity
    fetching identity -> fetch failed | resolved

Every branch ends in a redirect. Nothing is retried because authorization
codes are single-use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import urlencode, urlsplit, urlunsplit

from oauth_callback.clients.google_auth import (
    OAuthTokenExchangeError,
    OAuthUserInfoError,
)
from oauth_callback.models.oauth import (
    CallbackOutcome,
    FailureReason,
    IdentityInfo,
    TokenExchangeResult,
)
from oauth_callback.schemas.auth import CallbackQuery


class OAuthProviderClient(Protocol):
    async def exchange_authorization_code(self, code: str) -> TokenExchangeResult:
        ...

    async def fetch_user_info(self, access_token: str) -> IdentityInfo:
        ...


@dataclass(slots=True)
class CallbackContext:
    """Per-request state handed to each step of the flow."""

    request_id: str
    logger: logging.LoggerAdapter


class CallbackFlowError(Exception):
    """Terminates the flow with a known failure reason."""

    def __init__(self, reason: FailureReason, detail: str = "") -> None:
        super().__init__(reason.value)
        self.reason = reason
        self.detail = detail


class OAuthCallbackService:
    """Turns a provider redirect into an outcome redirect for the host app."""

    def __init__(self, oauth_client: OAuthProviderClient, frontend_base_url: str) -> None:
        self._oauth = oauth_client
        self._frontend_base_url = frontend_base_url

    async def handle(self, query: CallbackQuery, context: CallbackContext) -> str:
        """Resolve the callback and return the URL the browser must be sent to."""
        outcome = await self.resolve(query, context)
        return self.build_redirect_url(outcome)

    async def resolve(
        self, query: CallbackQuery, context: CallbackContext
    ) -> CallbackOutcome:
        log = context.logger
        log.info(
            "OAuth callback received (code present: %s, error: %s, state present: %s)",
            query.code is not None,
            query.error,
            query.state is not None,
        )
        try:
            code = self.require_code(query)
            tokens = await self.exchange_code(code, context)
            identity = await self.fetch_identity(tokens, context)
        except CallbackFlowError as exc:
            log.warning("OAuth callback failed: %s (%s)", exc.reason.value, exc.detail)
            return CallbackOutcome.failure(exc.reason)
        except Exception:
            log.exception("Unexpected error while handling OAuth callback")
            return CallbackOutcome.failure(FailureReason.INTERNAL_ERROR)

        log.info("OAuth flow completed for %s", identity.email)
        return CallbackOutcome.success(identity)

    @staticmethod
    def require_code(query: CallbackQuery) -> str:
        """Apply the provider-error and code-presence checks, in that order."""
        if query.error:
            detail = query.error
            if query.error_description:
                detail = f"{detail}: {query.error_description}"
            raise CallbackFlowError(FailureReason.PROVIDER_ERROR, detail)
        if not query.code:
            raise CallbackFlowError(
                FailureReason.MISSING_CODE, "no authorization code received"
            )
        return query.code

    async def exchange_code(
        self, code: str, context: CallbackContext
    ) -> TokenExchangeResult:
        context.logger.info("Starting token exchange")
        try:
            return await self._oauth.exchange_authorization_code(code)
        except OAuthTokenExchangeError as exc:
            raise CallbackFlowError(FailureReason.TOKEN_EXCHANGE_FAILED, str(exc)) from exc

    async def fetch_identity(
        self, tokens: TokenExchangeResult, context: CallbackContext
    ) -> IdentityInfo:
        context.logger.info("Fetching user info")
        try:
            return await self._oauth.fetch_user_info(tokens.access_token)
        except OAuthUserInfoError as exc:
            raise CallbackFlowError(FailureReason.IDENTITY_FETCH_FAILED, str(exc)) from exc

    def build_redirect_url(self, outcome: CallbackOutcome) -> str:
        """Encode ``outcome`` onto the host application's base URL."""
        if outcome.identity is not None:
            params = [("auth", "success"), ("user", outcome.identity.email)]
        else:
            params = [("error", outcome.reason.value)]

        parts = urlsplit(self._frontend_base_url)
        query = "&".join(filter(None, [parts.query, urlencode(params)]))
        return urlunsplit(parts._replace(query=query))


__all__ = [
    "CallbackContext",
    "CallbackFlowError",
    "OAuthCallbackService",
    "OAuthProviderClient",
]
