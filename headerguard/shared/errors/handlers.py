"""
Centralized error handlers for FastAPI.

Serves the application's error pages as JSON bodies.
No stack traces or internal details are exposed to clients.

HTTP and validation errors are rendered inside the middleware stack and
pick up the policy headers there. Unexpected errors are rendered by the
outermost server-error middleware, so that handler runs the header
pipeline itself.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from headerguard.application.headers.pipeline import HeaderPipeline
from headerguard.shared.security.headers import apply_header_pipeline

logger = logging.getLogger(__name__)

HTTP_422 = 422
HTTP_500 = 500


def _error_response(
    status_code: int,
    error: str,
    detail: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def register_error_handlers(app: FastAPI, pipeline: HeaderPipeline) -> None:
    """Register the error pages on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        pipeline: Header pipeline applied to pages rendered outside
            the middleware stack.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render HTTP errors (404, 405, ...) as JSON."""
        logger.info(
            "HTTP %d on %s %s", exc.status_code, request.method, request.url.path
        )
        return _error_response(
            exc.status_code,
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request validation failures."""
        logger.warning("Request validation failed: %d error(s)", len(exc.errors()))
        return _error_response(HTTP_422, "Invalid request")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        response = _error_response(HTTP_500, "Internal server error")
        return apply_header_pipeline(pipeline, request, response)
