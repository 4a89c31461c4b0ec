"""FastAPI dependency returning the process-wide settings."""

from oauth_callback.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """Settings injected into routes; tests swap them via ``dependency_overrides``."""
    return get_settings()


__all__ = ["get_app_settings"]
