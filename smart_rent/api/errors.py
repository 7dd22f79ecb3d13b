# File: smart_rent/api/errors.py

"""
Exception handlers that give every error response the same shape:

    {"error": "<message>"}

Request validation problems are answered with 400 instead of FastAPI's
default 422.
"""

import logging
from typing import Any, Dict, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "form", "file"}


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    messages = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOCATION_PREFIXES]
        msg = err.get("msg", "Invalid value")
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(messages) or "Invalid request"


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": format_validation_errors(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
