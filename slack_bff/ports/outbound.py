"""Outbound ports: interfaces for external system adapters."""

from datetime import datetime
from typing import Any, List, Optional, Protocol, runtime_checkable

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


@runtime_checkable
class ChatPlatformPort(Protocol):
    """Interface for the upstream chat platform (one call per operation)."""

    async def exchange_code(self, code: str) -> TokenGrant: ...

    async def verify_token(self, token: str) -> Identity: ...

    async def get_user_profile(self, token: str, user_id: str) -> UserProfile: ...

    async def send_message(self, token: str, message: MessageDescriptor) -> SentMessage: ...

    async def schedule_message(
        self, token: str, message: MessageDescriptor, post_at: datetime
    ) -> ScheduledMessage: ...

    async def update_message(
        self,
        token: str,
        channel: str,
        timestamp: str,
        text: str,
        blocks: Optional[List[Any]] = None,
        attachments: Optional[List[Any]] = None,
    ) -> UpdatedMessage: ...

    async def delete_message(self, token: str, channel: str, timestamp: str) -> DeletedMessage: ...

    async def list_messages(
        self,
        token: str,
        channel: str,
        latest: Optional[str] = None,
        oldest: Optional[str] = None,
        limit: int = 100,
        inclusive: bool = False,
        cursor: Optional[str] = None,
    ) -> MessageHistory: ...

    async def list_channels(
        self,
        token: str,
        types: Optional[str] = None,
        limit: int = 100,
        cursor: Optional[str] = None,
    ) -> ChannelList: ...

    async def get_permalink(self, token: str, channel: str, message_ts: str) -> Permalink: ...
