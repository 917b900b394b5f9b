"""FastAPI application for the customer journey engine.

create_app() wires lifespan, error handlers, middleware and the v1 router.
Settings are read inside create_app() so tests can adjust the environment
before the app is built.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import (
    MULTIPART_OVERHEAD_BYTES,
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    TimeoutMiddleware,
)


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: timeout wraps the size check, which wraps request IDs and CORS.
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    # Uploads are the largest bodies; allow the multipart framing on top of a max-size file.
    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_upload_size + MULTIPART_OVERHEAD_BYTES,
    )
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Requirement generation, approval, questionnaire autosave and document slots.",
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    _install_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
