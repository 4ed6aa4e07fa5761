"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. Settings
are loaded inside create_app() so that tests can set env (and clear the
get_settings cache) before building an app.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from citaya.api.v1 import api_router
from citaya.api.v1.endpoints import health
from citaya.core.config import get_settings
from citaya.core.exception_handlers import register_exception_handlers
from citaya.core.lifespan import create_lifespan
from citaya.core.limiter import limiter
from citaya.middleware import RequestIDMiddleware, RequestSizeLimitMiddleware


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    register_exception_handlers(app)

    # Middleware: first added = innermost. Order (outer to inner): size limit -> request ID -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_upload_size)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
