"""
FastAPI application factory.

Builds the app from an explicit AppConfig and Slack client so tests (and
the process entry point) decide what gets injected.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from slack_bff.adapters.slack.client import SlackClient
from slack_bff.adapters.web.auth_routes import auth_router
from slack_bff.adapters.web.error_handlers import register_error_handlers
from slack_bff.adapters.web.message_routes import messages_router
from slack_bff.adapters.web.middleware import (
    SecurityHeadersMiddleware,
    build_limiter,
    rate_limit_exceeded_handler,
)
from slack_bff.config import AppConfig, __version__
from slack_bff.ports.outbound import ChatPlatformPort

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    slack_client: Optional[ChatPlatformPort] = None,
    limiter: Optional[Limiter] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Application configuration (read from the environment if omitted)
        slack_client: Upstream chat platform client (SlackClient if omitted)
        limiter: Inbound rate limiter (built from config.rate_limit if omitted)
    """
    config = config or AppConfig.from_env()
    app = FastAPI(
        title="Slack API Backend",
        description="Backend-for-frontend proxy for Slack OAuth and messaging",
        version=__version__,
    )
    app.state.config = config
    app.state.slack_client = slack_client or SlackClient(config.slack)
    # SlowAPIMiddleware reads the limiter from app.state.limiter
    app.state.limiter = limiter or build_limiter(config.rate_limit)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Last added runs first: CORS, then security headers, then rate limiting.
    # Preflights are answered by CORS and never reach the limiter.
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app, config)

    @app.get("/health", tags=["Health"])
    async def health():
        return {
            "success": True,
            "message": "Slack API Backend is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
        }

    app.include_router(auth_router)
    app.include_router(messages_router)

    if not config.slack.client_id or not config.slack.client_secret:
        logger.warning("Slack client credentials are not configured; OAuth routes will fail")

    return app
