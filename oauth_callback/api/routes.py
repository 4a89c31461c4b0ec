"""
FastAPI routes for the OAuth callback listener.
"""

from __future__ import annotations

import logging
import uuid
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import RedirectResponse

from oauth_callback.core.logging import bind_request_logger
from oauth_callback.dependencies import get_callback_service, get_google_oauth_client
from oauth_callback.schemas import CallbackQuery, HealthStatus
from oauth_callback.services import CallbackContext

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", status_code=HTTPStatus.OK, response_model=HealthStatus)
async def healthcheck() -> HealthStatus:
    """Liveness probe; does not touch configuration or Google."""
    return HealthStatus()


@router.get("/auth/google/login", status_code=HTTPStatus.FOUND)
async def start_google_login(
    oauth_client: Annotated[Any, Depends(get_google_oauth_client)],
    state: Optional[str] = Query(
        default=None, description="Opaque value Google echoes back to the callback."
    ),
) -> RedirectResponse:
    """Send the browser to the Google consent screen."""
    authorization_url = oauth_client.build_authorization_url(state=state)
    logger.info("Redirecting to Google consent screen")
    return RedirectResponse(url=authorization_url, status_code=HTTPStatus.FOUND)


@router.get("/oauth-callback", status_code=HTTPStatus.FOUND)
@router.get("/oauth/google/callback", status_code=HTTPStatus.FOUND, include_in_schema=False)
async def handle_google_oauth_callback(
    service: Annotated[Any, Depends(get_callback_service)],
    code: Optional[str] = Query(default=None, description="Authorization code."),
    error: Optional[str] = Query(default=None, description="Provider error."),
    error_description: Optional[str] = Query(default=None),
    state: Optional[str] = Query(default=None),
) -> RedirectResponse:
    """
    Complete the authorization-code exchange and redirect to the host app.

    Always answers with a redirect: the browser is mid-navigation and cannot
    act on an error body.
    """
    request_id = uuid.uuid4().hex
    context = CallbackContext(
        request_id=request_id,
        logger=bind_request_logger(__name__, request_id),
    )
    query = CallbackQuery(
        code=code, error=error, error_description=error_description, state=state
    )
    redirect_url = await service.handle(query, context)
    return RedirectResponse(url=redirect_url, status_code=HTTPStatus.FOUND)


__all__ = ["router"]
