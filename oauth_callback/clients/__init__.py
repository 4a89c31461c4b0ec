"""Expose constructed client wrappers."""

from .google_auth import GoogleOAuthClient, OAuthTokenExchangeError, OAuthUserInfoError

__all__ = [
    "GoogleOAuthClient",
    "OAuthTokenExchangeError",
    "OAuthUserInfoError",
]
