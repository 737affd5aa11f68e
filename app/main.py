"""FastAPI application entry point for flowsense.

Wiring only; flow logic lives in app.application. Settings are read inside
create_app() so tests can adjust the environment (and clear the
get_settings cache) before the app is built.

Run locally with: uvicorn app.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import RequestIDMiddleware
from app.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build the flowsense API: logging, error handlers, middleware, /api/v1 routers."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Flow rules with cycle detection, office-hours TAT and flow path analysis",
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    # SlowAPI reads the limiter from app state; 429s go through our handlers.
    app.state.limiter = limiter
    register_exception_handlers(app)

    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last, so it runs first and every log line of the request has an id.
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        return {"name": settings.app_name, "docs": "/docs"}

    return app


app = create_app()
