#!/usr/bin/env python3
"""
Error handlers for the web application.

Smart Match domain errors are translated into the JSON error envelope:
- InvalidInput -> 400
- NotFound -> 404
- LookupFailed -> 503 with retryable=true, so clients offer a retry
  instead of showing a misleadingly low score
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.smart_match.exceptions import SmartMatchError, InvalidInput, LookupFailed, NotFound

logger = logging.getLogger(__name__)


async def smart_match_exception_handler(
    request: Request,
    exc: SmartMatchError
) -> JSONResponse:
    """
    Handle Smart Match domain exceptions.

    Args:
        request: The FastAPI request.
        exc: The domain exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    retryable = False
    if isinstance(exc, InvalidInput):
        status_code = 400
    elif isinstance(exc, NotFound):
        status_code = 404
    elif isinstance(exc, LookupFailed):
        status_code = 503
        retryable = True

    if status_code >= 500:
        logger.error(f"Smart Match error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected request to {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__,
            "retryable": retryable
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
