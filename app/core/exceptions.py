"""
core/exceptions.py

Description:
Standard error payloads and the application-level exception handlers.
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """HTTPException carrying a `{"error": message}` detail body."""

    def __init__(self, status_code: int, message: str, headers: dict[str, Any] | None = None):
        super().__init__(status_code=status_code, detail={"error": message}, headers=headers)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Returns 429 with a retry hint when a SlowAPI limit is hit."""
    logger.warning(f"[RATE LIMIT] {request.client.host if request.client else '-'} exceeded {exc.detail} on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Too many requests. Please slow down and try again shortly."},
    )


async def not_found_handler(request: Request, exc: HTTPException) -> JSONResponse:
    if exc.detail and exc.detail != "Not Found":
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    error = APIError(status.HTTP_404_NOT_FOUND, f"Route {request.url.path} not found")
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(status.HTTP_404_NOT_FOUND, not_found_handler)  # type: ignore[arg-type]
