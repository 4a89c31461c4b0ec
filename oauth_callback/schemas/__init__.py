"""Public schema exports."""

from .auth import CallbackQuery, HealthStatus

__all__ = ["CallbackQuery", "HealthStatus"]
