"""Slack BFF: backend-for-frontend proxy for Slack OAuth and messaging."""

from slack_bff.config import AppConfig, ConfigurationError, RateLimitConfig, SlackConfig, __version__
from slack_bff.adapters.slack.client import SlackClient
from slack_bff.adapters.web.server import create_app
from slack_bff.domain.errors import ApiError, ErrorCode, SlackClientError

__all__ = [
    "__version__",
    "AppConfig",
    "ConfigurationError",
    "RateLimitConfig",
    "SlackConfig",
    "SlackClient",
    "create_app",
    "ApiError",
    "ErrorCode",
    "SlackClientError",
]
