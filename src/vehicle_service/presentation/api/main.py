"""FastAPI main application module."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from ...infrastructure.logging import LoggingConfig, get_logger
from ...infrastructure.services import configure_service_factory, initialize_services, shutdown_services
from .routes import health, vehicles
from .config import Settings, get_settings
from .errors import INTERNAL_ERROR_MESSAGE
from .middleware import RequestResponseLoggingMiddleware


logger = get_logger(__name__)


def build_lifespan(settings: Settings):
    """Build the lifespan handler for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan management."""
        # Startup
        LoggingConfig(
            log_level=settings.log_level,
            service_name=settings.service_name,
            log_file=settings.log_file,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
            enable_console=settings.log_enable_console
        ).setup_logging()
        logger.info("Starting Vehicle Service API")
        await initialize_services()

        yield

        # Shutdown
        logger.info("Shutting down Vehicle Service API")
        await shutdown_services()

    return lifespan


def _internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def add_exception_handlers(app: FastAPI) -> None:
    """Add handlers for failures that escape the route handlers."""

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        """Handle storage failures."""
        logger.error(f"Storage error on {request.method} {request.url.path}", exc_info=exc)
        return _internal_error()

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        """Handle anything else so clients always get a JSON error body."""
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
            exc_info=exc
        )
        return _internal_error()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    configure_service_factory(
        settings.database_url,
        backend=settings.repository_backend,
        echo=settings.db_echo,
        pool_pre_ping=settings.db_pool_pre_ping
    )

    app = FastAPI(
        title="Vehicle Service",
        description="CRUD API for vehicles keyed by VIN",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=build_lifespan(settings)
    )

    add_exception_handlers(app)

    app.add_middleware(RequestResponseLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=settings.allowed_methods,
        allow_headers=settings.allowed_headers,
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(
        vehicles.router,
        prefix=f"{settings.api_prefix}/vehicle",
        tags=["vehicles"]
    )

    return app


# Create app instance
app = create_app()
