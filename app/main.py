"""
FastAPI application entry point.
Challenge: Mount routes, middleware (CORS, access log, Prometheus), error handlers.
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_client import Counter, Histogram, make_asgi_app

from app.api.router import api_router
from app.config import get_settings
from app.core.errors import register_error_handlers
from app.core.logging_config import configure_logging
from app.db.session import engine

logger = logging.getLogger(__name__)

HTTP_REQUESTS_TOTAL = Counter(
    "marketplace_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "route", "status_code"],
)
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "marketplace_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "route"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: log where we listen from. Shutdown: release pooled DB connections."""
    settings = get_settings()
    logger.info("%s %s starting (env=%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    await engine.dispose()


def _route_label(request: Request) -> str:
    # Use the route template so /api/listings/1 and /api/listings/2 share a label
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Marketplace for second-hand electronics: listings, auth, image uploads, health.",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - started
            route = _route_label(request)
            HTTP_REQUESTS_TOTAL.labels(method=request.method, route=route, status_code=str(status_code)).inc()
            HTTP_REQUEST_DURATION_SECONDS.labels(method=request.method, route=route).observe(duration)
            logger.info("%s %s %s %.1fms", request.method, request.url.path, status_code, duration * 1000)

    register_error_handlers(app)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")

    @app.get("/api/test", include_in_schema=False)
    async def backend_running():
        return {"message": "Backend running"}

    uploads_dir = Path(settings.uploads_dir)
    if uploads_dir.is_dir():
        app.mount("/uploads", StaticFiles(directory=str(uploads_dir)), name="uploads")

    return app


app = create_app()
