"""FastAPI dependencies: configuration, Slack client and the bearer-token gate."""

import inspect
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional

from fastapi import Depends, Header, Request, params

from slack_bff.config import AppConfig
from slack_bff.domain.errors import (
    ApiError,
    ErrorCode,
    SlackClientError,
    translate_upstream_error,
)
from slack_bff.domain.models import Identity, to_payload
from slack_bff.ports.outbound import ChatPlatformPort

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    """Verified caller for one request."""

    identity: Identity
    token: str


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_slack_client(request: Request) -> ChatPlatformPort:
    return request.app.state.slack_client


def bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an Authorization header value without verifying it."""
    if not authorization:
        raise ApiError(ErrorCode.MISSING_AUTHORIZATION, "Authorization header is required")

    parts = authorization.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise ApiError(ErrorCode.MISSING_TOKEN, "Bearer token is required")
    return token


def is_protected(endpoint: Optional[Callable[..., Any]]) -> bool:
    """True when the route endpoint declares the require_auth dependency."""
    if endpoint is None:
        return False
    return any(
        isinstance(param.default, params.Depends) and param.default.dependency is require_auth
        for param in inspect.signature(endpoint).parameters.values()
    )


async def require_auth(
    authorization: Optional[str] = Header(default=None),
    slack: ChatPlatformPort = Depends(get_slack_client),
) -> AuthContext:
    """
    Extract and verify the bearer token from the Authorization header.

    Raises:
        ApiError 401 MISSING_AUTHORIZATION, MISSING_TOKEN or AUTHENTICATION_FAILED
    """
    token = bearer_token(authorization)

    try:
        identity = await slack.verify_token(token)
    except SlackClientError as e:
        logger.info("Rejected request with unverifiable token: %s", e.detail)
        raise ApiError(ErrorCode.AUTHENTICATION_FAILED, str(e)) from e

    return AuthContext(identity=identity, token=token)


@contextmanager
def upstream_call(code: ErrorCode) -> Iterator[None]:
    """Translate Slack adapter failures raised inside the block into ApiError."""
    try:
        yield
    except SlackClientError as e:
        raise translate_upstream_error(e, code) from e


def ok(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": to_payload(data)}
