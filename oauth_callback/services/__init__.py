"""Service layer exports."""

from .callback_flow import (
    CallbackContext,
    CallbackFlowError,
    OAuthCallbackService,
    OAuthProviderClient,
)

__all__ = [
    "CallbackContext",
    "CallbackFlowError",
    "OAuthCallbackService",
    "OAuthProviderClient",
]
