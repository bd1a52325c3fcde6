"""
EstateIQ API - Main Application

Property-management backend for a Nigerian estate portfolio:
- /api/auth, /api/users          → Staff accounts (JWT)
- /api/tenants, /api/payments    → Lease ledger and rent payments
- /api/maintenance, /api/notifications, /api/messages
- /api/stats, /api/alerts        → Dashboard
- /api/portal/{tenant_id}        → Public tenant portal
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from database import DatabaseConnection
from database.seed import seed_primary_admin
from core.config import settings
from core.exceptions import AppError, ConflictError
from core.logging_setup import configure_logging
from middleware import RequestLogMiddleware
from routers import (
    auth_router, users_router, tenants_router, payments_router,
    maintenance_router, notifications_router, messages_router,
    reports_router, portal_router,
)


API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} v{settings.version}...")

    db: DatabaseConnection = app.state.db
    try:
        db.initialize(create_tables=True)

        if settings.seed_admin:
            with db.get_session() as session:
                seed_primary_admin(session, settings)

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    logger.info(f"{settings.app_name} started")

    yield

    db.dispose()
    logger.info(f"Shutting down {settings.app_name}...")


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    """Every failure leaves the API as {"error": "<message>"}."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _first_validation_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        return JSONResponse(
            status_code=ConflictError.status_code,
            content={"error": ConflictError.default_message},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Internal server error"},
        )


def create_app(database: Optional[DatabaseConnection] = None) -> FastAPI:
    """Build the application around a database connection (from settings by default)."""
    app = FastAPI(
        title=settings.app_name,
        description="""
    Property-management API: tenants and leases, rent payments,
    maintenance, WhatsApp reminders and dashboard analytics.
    """,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.db = database or DatabaseConnection(
        settings.database_url,
        pool_size=settings.db_pool_size,
        echo=settings.db_echo,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)

    register_exception_handlers(app)

    # ==================== HEALTH ====================

    @app.get("/", tags=["Health"])
    def root():
        return {"status": f"{settings.app_name} v2 ✓"}

    @app.get(f"{API_PREFIX}/health", tags=["Health"])
    def health_check():
        try:
            app.state.db.ping()
            return {"status": "ok", "db": "connected", "version": settings.version}
        except Exception as e:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"status": "error", "db": str(e)},
            )

    # ==================== API ROUTERS ====================

    app.include_router(auth_router, prefix=f"{API_PREFIX}/auth", tags=["Authentication"])
    app.include_router(users_router, prefix=f"{API_PREFIX}/users", tags=["Users"])
    app.include_router(tenants_router, prefix=f"{API_PREFIX}/tenants", tags=["Tenants"])
    app.include_router(payments_router, prefix=f"{API_PREFIX}/payments", tags=["Payments"])
    app.include_router(maintenance_router, prefix=f"{API_PREFIX}/maintenance", tags=["Maintenance"])
    app.include_router(notifications_router, prefix=f"{API_PREFIX}/notifications", tags=["Notifications"])
    app.include_router(messages_router, prefix=f"{API_PREFIX}/messages", tags=["Messages"])
    app.include_router(reports_router, prefix=API_PREFIX, tags=["Reports"])
    app.include_router(portal_router, prefix=f"{API_PREFIX}/portal", tags=["Portal"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=4000,
        reload=settings.debug
    )
