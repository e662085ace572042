"""FastAPI middleware: CORS, correlation IDs and the JSON error envelope."""

from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING

import structlog
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from lingvoblog.errors import BlogError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request, Response

logger = structlog.get_logger()

CORRELATION_HEADER = "X-Correlation-ID"
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type", "x-api-key"]


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Tags every request with a correlation id and logs how it ended."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:12]

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )

        started = time.monotonic()
        try:
            response = await call_next(request)
        except Exception as exc:
            # Answered here so the 500 still passes back through CORS.
            response = internal_error_response(exc)
        elapsed_ms = round((time.monotonic() - started) * 1000, 2)

        log = logger.warning if response.status_code >= 500 else logger.info
        log("Request completed", status=response.status_code, duration_ms=elapsed_ms)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def internal_error_response(exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception", error=str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def add_middleware(app: FastAPI) -> None:
    """Install correlation IDs and wildcard-origin CORS (outermost)."""
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
        expose_headers=[CORRELATION_HEADER],
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers returning ``{"error": ...}`` envelopes."""

    @app.exception_handler(BlogError)
    async def blog_error_handler(_request: Request, exc: BlogError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed", error=exc.message, status=exc.status_code)
        else:
            logger.info("Request rejected", error=exc.message, status=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request body", "details": details},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        return internal_error_response(exc)
