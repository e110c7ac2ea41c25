from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from learn_python import __version__
from learn_python.api.echo import router as echo_router
from learn_python.api.health import router as health_router
from learn_python.api.info import router as info_router
from learn_python.api.metrics import router as metrics_router
from learn_python.api.root import router as root_router
from learn_python.config import Settings, get_settings
from learn_python.models.envelope import envelope_response, failure
from learn_python.observability.logging import configure_logging
from learn_python.observability.middleware import RequestContextMiddleware
from learn_python.observability.security import SecurityHeadersMiddleware
from learn_python.observability.tracing import configure_tracing, shutdown_tracing
from learn_python.state import AppState


logger = structlog.get_logger(__name__)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = envelope_response(failure(str(exc.detail)), status_code=exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version or __version__,
        description=settings.app_description,
    )
    app.state.app_state = AppState.boot(settings)

    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(info_router)
    app.include_router(echo_router)
    app.include_router(metrics_router)

    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    # Last added runs outermost.
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    @app.on_event("startup")
    def _startup() -> None:
        configure_tracing(settings)
        logger.info(
            "service_started",
            address=settings.bind_address,
            version=settings.app_version,
            environment=settings.environment,
            started_at=app.state.app_state.app_info.started_at,
        )

    @app.on_event("shutdown")
    def _shutdown() -> None:
        logger.info("service_stopping")
        shutdown_tracing()

    return app


_app: FastAPI | None = None


def __getattr__(name: str) -> FastAPI:
    # `uvicorn learn_python.main:app` builds the app from env settings on first access.
    global _app
    if name != "app":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    if _app is None:
        _app = create_app()
    return _app
