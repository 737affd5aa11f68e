"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    get_organization_id,
    get_request_id,
    reset_request_id,
    set_organization_id,
    set_request_id,
)
from app.shared.utils import ensure_utc, generate_cuid, to_local, utc_now

__all__ = [
    "ensure_utc",
    "generate_cuid",
    "get_organization_id",
    "get_request_id",
    "reset_request_id",
    "set_organization_id",
    "set_request_id",
    "to_local",
    "utc_now",
]
