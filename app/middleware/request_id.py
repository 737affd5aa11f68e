"""Request ID middleware (raw ASGI).

Each HTTP request gets an id: the client's X-Request-ID when it is safe to
log, a fresh UUID otherwise. The id is put in the request context (picked
up by the logging filter), on request.state, and on the response headers.
"""

import re
import uuid
from typing import Any, Callable

from app.shared.context import reset_request_id, set_request_id

REQUEST_ID_MAX_LENGTH = 64
_SAFE_REQUEST_ID = re.compile(r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$")


def resolve_request_id(raw: str | None) -> str:
    """Return raw (stripped) when it is a safe id, else a new UUID4 string."""
    candidate = (raw or "").strip()
    if _SAFE_REQUEST_ID.match(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Tag every HTTP request/response pair with a request id."""

    def __init__(self, app: Callable, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    def _incoming(self, scope: dict[str, Any]) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                return value.decode("latin-1")
        return None

    async def __call__(self, scope: dict[str, Any], receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = resolve_request_id(self._incoming(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        header = (self._header_key, request_id.encode("latin-1"))

        async def send_with_id(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), header]
            await send(message)

        token = set_request_id(request_id)
        try:
            await self.app(scope, receive, send_with_id)
        finally:
            reset_request_id(token)
