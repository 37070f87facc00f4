"""Exception handlers installed on the FastAPI app.

Expected failures are raised as ``HTTPException`` from the service layer and
rendered by FastAPI; request validation errors become 422s with per-field
details. Tortoise's ``DoesNotExist`` and ``IntegrityError`` map to 404 and
422. Anything else is logged and turned into a 500 JSON body so a single
failing request never takes the process down.
"""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from tortoise.contrib.fastapi import tortoise_exception_handlers

logger = logging.getLogger(__name__)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error"},
    )


def exception_handlers() -> dict:
    handlers = dict(tortoise_exception_handlers())
    handlers[Exception] = unhandled_exception_handler
    return handlers
