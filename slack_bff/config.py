"""Configuration loaded once from the environment."""

__version__ = "1.0.0"

import os
from dataclasses import dataclass, field
from typing import List, Tuple
from urllib.parse import urlencode

from dotenv import load_dotenv

load_dotenv()

SLACK_AUTHORIZE_URL = "https://slack.com/oauth/v2/authorize"

DEFAULT_SCOPES: Tuple[str, ...] = (
    "channels:read",
    "chat:write",
    "chat:write.public",
    "users:read",
    "users:read.email",
    "im:read",
    "im:write",
    "mpim:read",
    "mpim:write",
    "groups:read",
    "groups:write",
)


class ConfigurationError(Exception):
    """Raised when required configuration values are missing"""
    pass


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name, "")
    items = tuple(s.strip() for s in raw.split(",") if s.strip())
    return items or default


@dataclass(frozen=True)
class SlackConfig:
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = "http://localhost:3000/auth/callback"
    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    api_base: str = "https://slack.com/api"
    timeout_seconds: float = 10.0

    def missing_keys(self) -> List[str]:
        required = ("client_id", "client_secret", "redirect_uri")
        return [key for key in required if not getattr(self, key)]

    def validate(self) -> None:
        missing = self.missing_keys()
        if missing:
            raise ConfigurationError(
                f"Missing required Slack configuration: {', '.join(missing)}"
            )

    def oauth_url(self, state: str) -> str:
        """Build the Slack authorize URL for the given CSRF state value."""
        params = {
            "client_id": self.client_id,
            "scope": ",".join(self.scopes),
            "redirect_uri": self.redirect_uri,
            "state": state,
            "response_type": "code",
        }
        return f"{SLACK_AUTHORIZE_URL}?{urlencode(params)}"


@dataclass(frozen=True)
class RateLimitConfig:
    max_requests: int = 100
    window_seconds: int = 15 * 60


@dataclass(frozen=True)
class AppConfig:
    """Typed application configuration, built once at startup."""

    port: int = 3000
    environment: str = "production"
    log_level: str = "info"
    frontend_url: str = "http://localhost:3000"
    slack: SlackConfig = field(default_factory=SlackConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        defaults = SlackConfig()
        return cls(
            port=int(os.getenv("PORT", "3000")),
            environment=os.getenv("APP_ENV", "production").strip().lower(),
            log_level=os.getenv("LOG_LEVEL", "info").strip().lower(),
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3000"),
            slack=SlackConfig(
                client_id=os.getenv("SLACK_CLIENT_ID", ""),
                client_secret=os.getenv("SLACK_CLIENT_SECRET", ""),
                redirect_uri=os.getenv("SLACK_REDIRECT_URI", "") or defaults.redirect_uri,
                scopes=_env_list("SLACK_SCOPES", DEFAULT_SCOPES),
                api_base=os.getenv("SLACK_API_BASE", defaults.api_base).rstrip("/"),
                timeout_seconds=float(os.getenv("SLACK_API_TIMEOUT_SECONDS", "10")),
            ),
            rate_limit=RateLimitConfig(
                max_requests=int(os.getenv("RATE_LIMIT_MAX", "100")),
                window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900")),
            ),
        )
