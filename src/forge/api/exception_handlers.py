"""
Exception handlers for the FastAPI application.

Application exceptions are rendered as
``{"error": {"code", "message", "details"}}`` with the status code the
exception carries. FastAPI's own request validation keeps its 422 response.
"""

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..exceptions import ErrorCode, ForgeError


logger = logging.getLogger("forge.api")


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if details:
        content["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def forge_error_handler(request: Request, exc: ForgeError) -> JSONResponse:
    """Handle all ForgeError exceptions."""
    if exc.status_code >= 500:
        logger.warning(f"{exc.code.value} on {request.method} {request.url.path}: {exc.message}")
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code.value,
        message=exc.message,
        details=exc.details if exc.details else None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")
    return create_error_response(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR.value,
        message="An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ForgeError, forge_error_handler)
    # Must stay last: catches everything else
    app.add_exception_handler(Exception, generic_exception_handler)
