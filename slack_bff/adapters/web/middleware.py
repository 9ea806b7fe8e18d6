"""HTTP middleware: per-address rate limiting and security headers."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from slack_bff.config import RateLimitConfig
from slack_bff.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def build_limiter(config: RateLimitConfig) -> Limiter:
    """One shared allowance per client address across every route."""
    return Limiter(
        key_func=get_remote_address,
        application_limits=[f"{config.max_requests}/{config.window_seconds} seconds"],
        headers_enabled=True,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Called synchronously from SlowAPIMiddleware
    logger.warning("Rate limit exceeded for %s: %s", get_remote_address(request), exc.detail)
    response = JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": "Too many requests from this IP, please try again later.",
        },
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
