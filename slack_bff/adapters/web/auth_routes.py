"""OAuth and session routes."""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends

from slack_bff.adapters.web.dependencies import (
    AuthContext,
    get_config,
    get_slack_client,
    ok,
    require_auth,
    upstream_call,
)
from slack_bff.adapters.web.schemas import VerifyTokenRequest
from slack_bff.config import AppConfig, ConfigurationError
from slack_bff.domain.errors import ApiError, ErrorCode, SlackClientError
from slack_bff.ports.outbound import ChatPlatformPort

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["Auth"])


@auth_router.get("/oauth-url")
async def oauth_url(config: AppConfig = Depends(get_config)):
    """Return the Slack authorize URL with a fresh CSRF state value."""
    try:
        config.slack.validate()
    except ConfigurationError as e:
        raise ApiError(ErrorCode.OAUTH_URL_GENERATION_FAILED, str(e)) from e

    state = secrets.token_hex(32)
    return ok({"oauthUrl": config.slack.oauth_url(state), "state": state})


@auth_router.get("/callback")
async def oauth_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    """Complete the OAuth flow: exchange the code, then resolve the user.

    The state value is not checked here; the caller compares it with the
    one it received from /auth/oauth-url.
    """
    if error:
        raise ApiError(ErrorCode.OAUTH_ERROR, f"OAuth failed: {error}")
    if not code:
        raise ApiError(ErrorCode.MISSING_CODE, "Authorization code is required")

    logger.debug("OAuth callback received (state %s)", "present" if state else "absent")

    with upstream_call(ErrorCode.OAUTH_CALLBACK_FAILED):
        grant = await slack.exchange_code(code)
        user_id = grant.authed_user.get("id")
        if not user_id:
            raise ApiError(
                ErrorCode.OAUTH_CALLBACK_FAILED,
                "OAuth response did not include an authorized user",
            )
        profile = await slack.get_user_profile(grant.access_token, user_id)

    logger.info("OAuth completed for user %s", profile.id)
    return ok(
        {
            "accessToken": grant.access_token,
            "tokenType": grant.token_type,
            "scope": grant.scope,
            "team": grant.team,
            "user": profile,
        }
    )


@auth_router.post("/verify")
async def verify_token(
    req: Optional[VerifyTokenRequest] = None,
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    token = req.access_token if req else None
    if not token:
        raise ApiError(ErrorCode.MISSING_TOKEN, "Access token is required", status=400)

    try:
        identity = await slack.verify_token(token)
    except SlackClientError as e:
        raise ApiError(ErrorCode.TOKEN_VERIFICATION_FAILED, str(e)) from e
    return ok(identity)


@auth_router.get("/me")
async def me(
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.GET_USER_INFO_FAILED):
        profile = await slack.get_user_profile(auth.token, auth.identity.user_id)
    return ok(profile)


@auth_router.post("/logout")
async def logout(auth: AuthContext = Depends(require_auth)):
    """Nothing is held server side; the client discards its token."""
    return {"success": True, "message": "Logged out successfully"}
