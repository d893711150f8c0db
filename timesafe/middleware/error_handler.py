"""
Global exception handler middleware.

The chat core never raises for user text, so anything caught here is a bug in
the API layer. Clients get a JSON 500 instead of a dropped connection.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger


async def global_exception_handler(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception(f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Something went wrong on our side. Please try again.",
                "type": type(exc).__name__,
                "path": request.url.path,
            },
        )
