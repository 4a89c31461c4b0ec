"""
Factory functions to provide the OAuth client and callback service as FastAPI
dependencies.
"""

from typing import Annotated

from fastapi import Depends

from oauth_callback.clients import GoogleOAuthClient
from oauth_callback.core.config import AppSettings
from oauth_callback.services import OAuthCallbackService

from .config import get_app_settings


def get_google_oauth_client(
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> GoogleOAuthClient:
    """Provide a Google OAuth client built from the injected settings."""
    return GoogleOAuthClient(settings.google, timeout=settings.http_timeout_seconds)


def get_callback_service(
    oauth_client: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
) -> OAuthCallbackService:
    """Build a callback service bound to the host application's base URL."""
    return OAuthCallbackService(
        oauth_client=oauth_client,
        frontend_base_url=str(settings.frontend_base_url),
    )


__all__ = ["get_callback_service", "get_google_oauth_client"]
