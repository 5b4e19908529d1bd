# eduassist_analytics/core/error_handlers.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from .exceptions import RollupException

logger = logging.getLogger(__name__)


async def rollup_exception_handler(request: Request, exc: RollupException):
    """Render rollup exceptions as a single error message"""
    logger.error(f"Rollup error: {exc.message} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning(f"Validation error: {messages} - Path: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={"error": "; ".join(messages)}
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(RollupException, rollup_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
