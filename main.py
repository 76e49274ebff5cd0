"""
MacroLog FastAPI Application
Main entry point: configuration, middleware, exception handlers and routers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import health, meals

from domain.models import init_database
from adapters.identity_adapter import JWTIdentityProvider
from services.macro_estimator import MacroEstimator

from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    macrolog_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    general_exception_handler,
)
from app.exceptions import MacroLogError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("macrolog.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.

    Initializes the database with retries, then builds the macro estimator
    and identity provider. A missing credential aborts startup.
    """
    _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(init_database)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise

    try:
        app.state.macro_estimator = MacroEstimator.from_settings(settings)
        app.state.identity_provider = JWTIdentityProvider.from_settings(settings)
    except MacroLogError as exc:
        _logger.critical("Startup aborted: %s", exc)
        raise
    _logger.info(
        "Macro estimator ready (model=%s, attempts=%d)",
        settings.estimator_model,
        settings.estimator_max_attempts,
    )

    try:
        yield
    finally:
        _logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application with enhanced configuration
app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(MacroLogError, macrolog_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(meals.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
