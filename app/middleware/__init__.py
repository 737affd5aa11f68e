"""HTTP middleware: request ID.

Added in app.main.create_app(); Starlette runs the last added middleware
first.
"""

from app.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
