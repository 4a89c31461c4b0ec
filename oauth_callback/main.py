"""
FastAPI application entrypoint for the dedicated OAuth callback listener.

Runs on its own port so the redirect URI registered with Google stays fixed
regardless of how the main application routes requests.
"""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oauth_callback.api.routes import router as api_router
from oauth_callback.core.config import AppSettings, get_settings
from oauth_callback.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Factory for the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="STAAR Kids OAuth Callback",
        version="0.1.0",
        description="Completes Google sign-in and hands the result to the main app.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    """Serve the callback listener on its configured host and port."""
    settings = get_settings()
    logger.info(
        "OAuth callback server starting on %s:%d (callback URL: %s)",
        settings.server.host,
        settings.server.port,
        settings.google.redirect_uri,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":  # pragma: no cover - script entry point
    run()


__all__ = ["app", "create_app", "run"]
