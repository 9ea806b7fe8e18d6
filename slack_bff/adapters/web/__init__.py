"""Web adapter: FastAPI routes, auth gate, middleware and error handlers."""

from slack_bff.adapters.web.server import create_app

__all__ = ["create_app"]
