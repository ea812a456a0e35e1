"""Global exception handlers: domain errors keep their status, anything else is an opaque 500."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from charity.core.errors import CharityError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_BODY = {
    "error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(CharityError)
    async def charity_error_handler(request: Request, exc: CharityError) -> JSONResponse:
        if exc.http_status >= 500:
            logger.error(
                "%s on %s: %s", type(exc).__name__, request.url.path, exc.message,
                exc_info=exc,
            )
            return JSONResponse(status_code=exc.http_status, content=INTERNAL_ERROR_BODY)
        logger.info("%s on %s: %s", exc.code, request.url.path, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all; never leaks internal details."""
        logger.error("Unhandled exception on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR_BODY,
        )
