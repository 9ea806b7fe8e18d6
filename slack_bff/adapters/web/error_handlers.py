"""Exception handlers that render every failure as {success: false, error, message}."""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from slack_bff.adapters.web.dependencies import bearer_token, is_protected
from slack_bff.config import AppConfig
from slack_bff.domain.errors import STATUS_CODES, ApiError, ErrorCode

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "query", "path", "header")


def _error_response(code: ErrorCode, message: str, status: int = 0) -> JSONResponse:
    return JSONResponse(
        status_code=status or STATUS_CODES[code],
        content={"success": False, "error": code.value, "message": message},
    )


def validation_message(exc: RequestValidationError) -> str:
    """Describe the first validation problem, e.g. 'channel: Field required'."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in _LOCATION_PREFIXES]
    msg = first.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_error_handlers(app: FastAPI, config: AppConfig) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code.value, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # The body is decoded before dependencies run, so the header check comes first here
        if is_protected(request.scope.get("endpoint")):
            try:
                bearer_token(request.headers.get("authorization"))
            except ApiError as auth_error:
                return JSONResponse(
                    status_code=auth_error.status_code, content=auth_error.to_body()
                )
        message = validation_message(exc)
        logger.info("Validation error on %s %s: %s", request.method, request.url.path, message)
        return _error_response(ErrorCode.VALIDATION_ERROR, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error_response(
                ErrorCode.NOT_FOUND,
                f"Route {request.method} {request.url.path} not found",
            )
        if exc.status_code == 405:
            return _error_response(
                ErrorCode.METHOD_NOT_ALLOWED,
                f"Method {request.method} not allowed for {request.url.path}",
            )
        return _error_response(
            ErrorCode.INTERNAL_SERVER_ERROR, str(exc.detail), status=exc.status_code
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error on %s %s: %s: %s",
            request.method,
            request.url,
            type(exc).__name__,
            exc,
            exc_info=exc,
        )
        content = {
            "success": False,
            "error": ErrorCode.INTERNAL_SERVER_ERROR.value,
            "message": "An unexpected error occurred",
        }
        if config.is_development:
            content["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
            content["details"] = repr(exc)
        return JSONResponse(status_code=500, content=content)
