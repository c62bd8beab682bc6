"""
FastAPI application entry point.

Uses structured logging from issue_tracker.logging. The DatabaseManager is
built here (or passed in) and owned by the application.
"""

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from issue_tracker.db import DatabaseManager
from issue_tracker.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import Settings, get_settings
from .error_handlers import register_exception_handlers
from .routers import issues as issues_router

logger = get_logger("api")


def create_app(
    settings: Settings | None = None,
    database: DatabaseManager | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the cached environment settings.
        database: Pre-built DatabaseManager, e.g. an in-memory one in tests.
    """
    settings = settings or get_settings()
    configure_logging(level="DEBUG" if settings.debug else settings.log_level)

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.settings = settings
    app.state.database = database or DatabaseManager(settings)

    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # Structured request logging middleware (binds and echoes X-Request-ID)
    app.add_middleware(RequestLoggingMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize the database on startup."""
        logger.info("app_startup", app_name=settings.app_name)

        db = app.state.database
        db.initialize()
        if settings.create_tables:
            db.create_all_tables()
        logger.info("database_initialized", create_tables=settings.create_tables)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Release database connections on shutdown."""
        logger.info("app_shutdown")
        # A manager handed in by the caller stays open for the caller to reuse
        if database is None:
            app.state.database.dispose()

    @app.get("/health", tags=["health"])
    def health_check():
        """Health check endpoint (liveness probe)."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Verifies that the database answers a trivial query.

        Returns 200 if ready, 503 if not ready.
        """
        result = app.state.database.health_check()
        checks = {"database": result["healthy"]}

        if not result["healthy"]:
            logger.warning("readiness_check_failed", error=result["error"])
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )

        return {"status": "ready", "checks": checks}

    app.include_router(issues_router.router, prefix=settings.api_prefix)

    return app


app = create_app()
