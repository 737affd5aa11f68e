"""Shared telemetry: logging setup with request context."""

from app.shared.telemetry.logging import (
    RequestContextFilter,
    get_logger,
    setup_logging,
)

__all__ = [
    "RequestContextFilter",
    "get_logger",
    "setup_logging",
]
