"""
Consolidated middleware for the MacroLog API
"""

import time
import logging
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import MacroLogError

logger = logging.getLogger("macrolog.middleware")

FALLBACK_ERROR_MESSAGE = "Failed to process meal"


def error_body(message: str) -> dict:
    """Error payload shared by every handler: ``{"error": "<message>"}``"""
    return {"error": message or FALLBACK_ERROR_MESSAGE}


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.4f}s",
                },
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "error": str(exc),
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


async def macrolog_exception_handler(request: Request, exc: MacroLogError):
    """Map pipeline errors to their HTTP status"""
    if exc.http_status >= 500:
        logger.error(
            f"{exc.code} on {request.url}: {exc.message}",
            extra={"details": exc.details},
        )
    else:
        logger.warning(f"{exc.code} on {request.url}: {exc.message}")

    return JSONResponse(status_code=exc.http_status, content=error_body(exc.message))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors (query parameters)"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    errors = exc.errors()
    message = "Request validation failed"
    if errors:
        first = errors[0]
        location = ".".join(str(p) for p in first.get("loc", ()) if p != "query")
        message = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg", message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(FALLBACK_ERROR_MESSAGE),
    )
