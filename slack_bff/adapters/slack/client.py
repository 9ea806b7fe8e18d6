"""Slack Web API client using aiohttp."""

import asyncio
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Type

import aiohttp

from slack_bff.config import SlackConfig
from slack_bff.domain.errors import (
    ChannelListError,
    FailureKind,
    MessageDeleteError,
    MessageHistoryError,
    MessageScheduleError,
    MessageSendError,
    MessageUpdateError,
    OAuthExchangeError,
    PermalinkError,
    SlackClientError,
    TokenVerificationError,
    UserLookupError,
)
from slack_bff.domain.models import (
    ChannelList,
    DeletedMessage,
    Identity,
    MessageDescriptor,
    MessageHistory,
    Permalink,
    ScheduledMessage,
    SentMessage,
    TokenGrant,
    UpdatedMessage,
    UserProfile,
)
from slack_bff.domain.schedule import to_epoch_seconds

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_TYPES = "public_channel,private_channel"


def _query(params: Dict[str, Any]) -> Dict[str, str]:
    """Drop unset values and stringify the rest for the query string."""
    query = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        query[key] = str(value)
    return query


class SlackClient:
    """Async Slack Web API client.

    Every operation performs exactly one HTTP call, unwraps Slack's
    ``{ok, error}`` envelope and raises an operation-specific
    ``SlackClientError`` subclass on any failure. Nothing is retried.
    """

    def __init__(self, config: SlackConfig):
        self._config = config
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)

    async def _call(
        self,
        http_method: str,
        api_method: str,
        error_cls: Type[SlackClientError],
        *,
        token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self._config.api_base}/{api_method}"
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug("Slack %s %s", http_method, api_method)
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.request(
                    http_method,
                    url,
                    headers=headers,
                    json=json,
                    data=data,
                    params=_query(params) if params else None,
                ) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise error_cls(
                            self._error_from_body(body) or f"HTTP {resp.status}",
                            failure=FailureKind.HTTP,
                            status=resp.status,
                        )
                    payload = await resp.json(content_type=None)
        except SlackClientError as e:
            logger.warning("Slack %s failed: %s", api_method, e)
            raise
        except asyncio.TimeoutError:
            logger.warning("Slack %s timed out after %ss", api_method, self._config.timeout_seconds)
            raise error_cls("Request timeout", failure=FailureKind.TIMEOUT)
        except aiohttp.ClientError as e:
            logger.warning("Slack %s network error: %s", api_method, e)
            raise error_cls(str(e) or type(e).__name__, failure=FailureKind.NETWORK)
        except ValueError as e:
            raise error_cls(f"Invalid response from Slack API: {e}", failure=FailureKind.HTTP, status=502)

        if not isinstance(payload, dict):
            raise error_cls("Invalid response from Slack API", failure=FailureKind.HTTP, status=502)
        if not payload.get("ok"):
            error = payload.get("error") or "unknown_error"
            logger.warning("Slack %s returned error: %s", api_method, error)
            raise error_cls(error)
        return payload

    @staticmethod
    def _error_from_body(body: str) -> Optional[str]:
        try:
            data = json.loads(body)
        except ValueError:
            return None
        if isinstance(data, dict):
            return data.get("error")
        return None

    # ── OAuth / identity ─────────────────────────────────────

    async def exchange_code(self, code: str) -> TokenGrant:
        """Exchange an authorization code for an access token (oauth.v2.access)."""
        data = await self._call(
            "POST",
            "oauth.v2.access",
            OAuthExchangeError,
            data={
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret,
                "code": code,
                "redirect_uri": self._config.redirect_uri,
            },
        )
        return TokenGrant.from_slack(data)

    async def verify_token(self, token: str) -> Identity:
        data = await self._call("POST", "auth.test", TokenVerificationError, token=token)
        return Identity.from_slack(data)

    async def get_user_profile(self, token: str, user_id: str) -> UserProfile:
        data = await self._call(
            "GET", "users.info", UserLookupError, token=token, params={"user": user_id}
        )
        return UserProfile.from_slack(data.get("user") or {})

    # ── Messages ─────────────────────────────────────────────

    async def send_message(self, token: str, message: MessageDescriptor) -> SentMessage:
        data = await self._call(
            "POST", "chat.postMessage", MessageSendError, token=token, json=message.to_slack()
        )
        return SentMessage(
            channel=data.get("channel", message.channel),
            timestamp=data.get("ts", ""),
            message=data.get("message"),
        )

    async def schedule_message(
        self, token: str, message: MessageDescriptor, post_at: datetime
    ) -> ScheduledMessage:
        """Schedule a message. Callers must check that post_at is in the future."""
        payload = message.to_slack()
        payload["post_at"] = to_epoch_seconds(post_at)
        data = await self._call(
            "POST", "chat.scheduleMessage", MessageScheduleError, token=token, json=payload
        )
        return ScheduledMessage(
            channel=data.get("channel", message.channel),
            scheduled_message_id=data.get("scheduled_message_id", ""),
            post_at=int(data.get("post_at", payload["post_at"])),
        )

    async def update_message(
        self,
        token: str,
        channel: str,
        timestamp: str,
        text: str,
        blocks: Optional[List[Any]] = None,
        attachments: Optional[List[Any]] = None,
    ) -> UpdatedMessage:
        payload: Dict[str, Any] = {"channel": channel, "ts": timestamp, "text": text}
        if blocks is not None:
            payload["blocks"] = blocks
        if attachments is not None:
            payload["attachments"] = attachments
        data = await self._call(
            "POST", "chat.update", MessageUpdateError, token=token, json=payload
        )
        return UpdatedMessage(
            channel=data.get("channel", channel),
            timestamp=data.get("ts", timestamp),
            text=data.get("text"),
        )

    async def delete_message(self, token: str, channel: str, timestamp: str) -> DeletedMessage:
        data = await self._call(
            "POST",
            "chat.delete",
            MessageDeleteError,
            token=token,
            json={"channel": channel, "ts": timestamp},
        )
        return DeletedMessage(
            channel=data.get("channel", channel),
            timestamp=data.get("ts", timestamp),
        )

    async def list_messages(
        self,
        token: str,
        channel: str,
        latest: Optional[str] = None,
        oldest: Optional[str] = None,
        limit: int = 100,
        inclusive: bool = False,
        cursor: Optional[str] = None,
    ) -> MessageHistory:
        """Fetch channel history in the order Slack returns it (newest first)."""
        data = await self._call(
            "GET",
            "conversations.history",
            MessageHistoryError,
            token=token,
            params={
                "channel": channel,
                "limit": limit,
                "latest": latest,
                "oldest": oldest,
                "inclusive": inclusive or None,
                "cursor": cursor,
            },
        )
        return MessageHistory(
            messages=data.get("messages") or [],
            has_more=bool(data.get("has_more", False)),
            response_metadata=data.get("response_metadata"),
        )

    async def list_channels(
        self,
        token: str,
        types: Optional[str] = None,
        limit: int = 100,
        cursor: Optional[str] = None,
    ) -> ChannelList:
        data = await self._call(
            "GET",
            "conversations.list",
            ChannelListError,
            token=token,
            params={
                "types": types or DEFAULT_CHANNEL_TYPES,
                "limit": limit,
                "cursor": cursor,
            },
        )
        return ChannelList(
            channels=data.get("channels") or [],
            response_metadata=data.get("response_metadata"),
        )

    async def get_permalink(self, token: str, channel: str, message_ts: str) -> Permalink:
        data = await self._call(
            "GET",
            "chat.getPermalink",
            PermalinkError,
            token=token,
            params={"channel": channel, "message_ts": message_ts},
        )
        return Permalink(permalink=data.get("permalink", ""))
