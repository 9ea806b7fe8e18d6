"""Messaging routes: each forwards one call to Slack for the verified caller."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from slack_bff.adapters.web.dependencies import (
    AuthContext,
    get_slack_client,
    ok,
    require_auth,
    upstream_call,
)
from slack_bff.adapters.web.schemas import (
    EditMessageRequest,
    ScheduleMessageRequest,
    SendMessageRequest,
)
from slack_bff.domain.errors import ApiError, ErrorCode
from slack_bff.domain.schedule import is_in_future
from slack_bff.ports.outbound import ChatPlatformPort

messages_router = APIRouter(prefix="/messages", tags=["Messages"])

MAX_PAGE_SIZE = 1000


@messages_router.post("/send")
async def send_message(
    req: SendMessageRequest,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.SEND_MESSAGE_FAILED):
        result = await slack.send_message(auth.token, req.to_descriptor())
    return ok(result)


@messages_router.post("/schedule")
async def schedule_message(
    req: ScheduleMessageRequest,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    if not is_in_future(req.schedule_time):
        raise ApiError(ErrorCode.INVALID_SCHEDULE_TIME, "Schedule time must be in the future")

    with upstream_call(ErrorCode.SCHEDULE_MESSAGE_FAILED):
        result = await slack.schedule_message(auth.token, req.to_descriptor(), req.schedule_time)
    return ok(result)


@messages_router.get("/retrieve/{channel}")
async def retrieve_messages(
    channel: str,
    latest: Optional[str] = None,
    oldest: Optional[str] = None,
    limit: int = Query(default=100, ge=1, le=MAX_PAGE_SIZE),
    cursor: Optional[str] = None,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.RETRIEVE_MESSAGES_FAILED):
        result = await slack.list_messages(
            auth.token,
            channel,
            latest=latest,
            oldest=oldest,
            limit=limit,
            cursor=cursor,
        )
    return ok(result)


@messages_router.get("/retrieve/{channel}/{timestamp}")
async def retrieve_message(
    channel: str,
    timestamp: str,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    """Fetch the single message whose ts is exactly `timestamp`."""
    with upstream_call(ErrorCode.RETRIEVE_MESSAGE_FAILED):
        result = await slack.list_messages(
            auth.token,
            channel,
            latest=timestamp,
            oldest=timestamp,
            limit=1,
            inclusive=True,
        )
    if not result.messages:
        raise ApiError(ErrorCode.MESSAGE_NOT_FOUND, "Message not found")
    return ok({"message": result.messages[0]})


@messages_router.put("/edit")
async def edit_message(
    req: EditMessageRequest,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.EDIT_MESSAGE_FAILED):
        result = await slack.update_message(
            auth.token,
            req.channel,
            req.timestamp,
            req.text,
            blocks=req.blocks,
            attachments=req.attachments,
        )
    return ok(result)


@messages_router.delete("/delete/{channel}/{timestamp}")
async def delete_message(
    channel: str,
    timestamp: str,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.DELETE_MESSAGE_FAILED):
        result = await slack.delete_message(auth.token, channel, timestamp)
    return ok(result)


@messages_router.get("/channels")
async def list_channels(
    types: Optional[str] = None,
    limit: int = Query(default=100, ge=1, le=MAX_PAGE_SIZE),
    cursor: Optional[str] = None,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.GET_CHANNELS_FAILED):
        result = await slack.list_channels(auth.token, types=types, limit=limit, cursor=cursor)
    return ok(result)


@messages_router.get("/permalink/{channel}/{timestamp}")
async def get_permalink(
    channel: str,
    timestamp: str,
    auth: AuthContext = Depends(require_auth),
    slack: ChatPlatformPort = Depends(get_slack_client),
):
    with upstream_call(ErrorCode.GET_PERMALINK_FAILED):
        result = await slack.get_permalink(auth.token, channel, timestamp)
    return ok(result)
