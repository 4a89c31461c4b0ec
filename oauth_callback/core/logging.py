"""
Logging utilities for the callback listener.

Provides a consistent logging format plus a per-request adapter so the OAuth
flow can log without sharing mutable state between concurrent callbacks.
"""

import logging
import sys
from typing import Any, MutableMapping


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Prefix every record with the id of the callback request that emitted it."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("request_id", self.extra["request_id"])
        kwargs["extra"] = extra
        return f"[{self.extra['request_id']}] {msg}", kwargs


def bind_request_logger(name: str, request_id: str) -> RequestLoggerAdapter:
    return RequestLoggerAdapter(logging.getLogger(name), {"request_id": request_id})


__all__ = ["RequestLoggerAdapter", "bind_request_logger", "configure_logging"]
