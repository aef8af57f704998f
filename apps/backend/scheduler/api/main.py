"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize the FastAPI application (title, version, lifespan)
  - Configure middleware (CORS, request context)
  - Mount the scheduler routers under the /v1 prefix
  - Expose a health check

Collaborators:
  - RequestContextMiddleware: request id + logging context
  - interfaces.api.http.router.build_router: reservations / duties / users
  - infrastructure.db.pool: connection pool lifecycle

Notes:
  - In test environments (APP_ENV=test) the container wires in-memory
    repositories and the pool is never opened.
  - /healthz follows the Kubernetes health check convention.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool, is_pool_initialized, ping
from ..interfaces.api.http.router import build_router
from .exception_handlers import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the pool outside test environments."""
    settings = get_settings()

    if not settings.is_test():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    try:
        logger.info(
            "Scheduler API starting up",
            extra={
                "app_env": settings.app_env,
                "overdue_after_days": settings.overdue_after_days,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        close_pool()
        logger.info("Scheduler API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Scheduler API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "reservations", "description": "Shared resource bookings"},
            {"name": "duties", "description": "Duty catalog"},
            {"name": "assignments", "description": "Duty assignment lifecycle"},
            {"name": "users", "description": "User administration (admin)"},
        ],
    )

    # R: Middleware order (bottom = first to execute): CORS, then request context.
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(build_router(), prefix="/v1")
    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        R: Health check.

        Returns:
            ok: True if the backing store answers (always True in-memory)
            db: "connected", "disconnected" or "in-memory"
            request_id: Correlation ID for this request
        """
        if not is_pool_initialized():
            db_status = "in-memory" if settings.is_test() else "disconnected"
        else:
            db_status = "disconnected"
            try:
                if ping():
                    db_status = "connected"
            except Exception as e:
                logger.warning("Health check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status in {"connected", "in-memory"},
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
