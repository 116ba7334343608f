"""
FastAPI application for the resume submission service.

Routes:
- GET  /health                              : health check
- GET  /api/submission                      : list the caller's submissions
- POST /api/submission                      : create a submission
- POST /api/email/send                      : send one email
- POST /api/email/send-resume-notifications : pilot confirmation + admin alert
- POST /api/email/status-update             : status update email (admin)
- POST /api/email/test                      : test email (admin)
- POST /api/email/debug-sendgrid            : SendGrid diagnostics (admin)
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from core.api import API_TAGS, api_router
from database.connection import close_sync_engine, init_db
from middleware.correlation import RequestIdFilter, RequestIdMiddleware
from web.errors import register_exception_handlers

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(request_id)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging with the request ID on every record.

    Safe to call more than once; the handler is only installed once.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or get_settings().log_level).upper())

    for handler in root_logger.handlers:
        if any(isinstance(f, RequestIdFilter) for f in handler.filters):
            return

    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.name,
        version=settings.version,
        debug=settings.debug,
        openapi_tags=API_TAGS,
    )

    # =========================================================================
    # MIDDLEWARE (last added = first executed)
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.on_event("startup")
    def startup_security_validation():
        """Fail fast on production misconfiguration; warn elsewhere."""
        errors = settings.validate_production_security()
        if errors and settings.is_production:
            for error in errors:
                logger.error(f"[SECURITY] {error}")
            raise RuntimeError("Production security validation failed")
        if errors:
            logger.warning(
                f"[SECURITY] Development mode - {len(errors)} security settings "
                "would fail in production. Set APP_ENVIRONMENT=production to enforce."
            )

    @app.on_event("startup")
    def startup_database():
        """Create tables on application startup."""
        init_db()

    @app.on_event("shutdown")
    def shutdown_database():
        """Close database connections on application shutdown."""
        close_sync_engine()

    @app.get("/health", operation_id="root_health_check")
    def root_health_check():
        """Health check endpoint."""
        return JSONResponse({
            "status": "healthy",
            "service": settings.name,
            "version": settings.version,
            "environment": settings.environment,
        })

    logger.info(f"{settings.name} application created (environment={settings.environment})")
    return app


configure_logging()
app = create_app()
