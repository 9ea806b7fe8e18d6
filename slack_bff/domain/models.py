"""Domain data models: pure Python dataclasses."""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel


def to_payload(obj: Any) -> Any:
    """Serialize results for the JSON envelope.

    Dataclasses become dicts with camelCase keys. Plain dicts and lists are
    walked but their keys are left alone, so Slack objects pass through as-is.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return {to_camel(f.name): to_payload(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {key: to_payload(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [to_payload(item) for item in obj]
    return obj


@dataclass
class Identity:
    """Principal resolved from a session token (auth.test)."""

    user_id: str
    team_id: str
    user: Optional[str] = None
    team: Optional[str] = None
    url: Optional[str] = None
    bot_id: Optional[str] = None

    @classmethod
    def from_slack(cls, data: Dict[str, Any]) -> "Identity":
        return cls(
            user_id=data.get("user_id", ""),
            team_id=data.get("team_id", ""),
            user=data.get("user"),
            team=data.get("team"),
            url=data.get("url"),
            bot_id=data.get("bot_id"),
        )


@dataclass
class TokenGrant:
    """Result of exchanging an OAuth authorization code."""

    access_token: str
    token_type: Optional[str] = None
    scope: Optional[str] = None
    bot_user_id: Optional[str] = None
    app_id: Optional[str] = None
    team: Optional[Dict[str, Any]] = None
    enterprise: Optional[Dict[str, Any]] = None
    authed_user: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_slack(cls, data: Dict[str, Any]) -> "TokenGrant":
        return cls(
            access_token=data.get("access_token", ""),
            token_type=data.get("token_type"),
            scope=data.get("scope"),
            bot_user_id=data.get("bot_user_id"),
            app_id=data.get("app_id"),
            team=data.get("team"),
            enterprise=data.get("enterprise"),
            authed_user=data.get("authed_user") or {},
        )


@dataclass
class UserProfile:
    id: str
    name: Optional[str] = None
    real_name: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    timezone: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_slack(cls, user: Dict[str, Any]) -> "UserProfile":
        profile = user.get("profile") or {}
        return cls(
            id=user.get("id", ""),
            name=user.get("name"),
            real_name=user.get("real_name"),
            email=profile.get("email"),
            image=profile.get("image_192"),
            timezone=user.get("tz"),
            status=profile.get("status_text"),
        )


@dataclass
class MessageDescriptor:
    """One outgoing chat message: channel + text + optional rich content."""

    channel: str
    text: str
    blocks: Optional[List[Any]] = None
    attachments: Optional[List[Any]] = None
    thread_ts: Optional[str] = None

    def to_slack(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"channel": self.channel, "text": self.text}
        if self.blocks is not None:
            payload["blocks"] = self.blocks
        if self.attachments is not None:
            payload["attachments"] = self.attachments
        if self.thread_ts:
            payload["thread_ts"] = self.thread_ts
        return payload


@dataclass
class SentMessage:
    channel: str
    timestamp: str
    message: Optional[Dict[str, Any]] = None


@dataclass
class ScheduledMessage:
    channel: str
    scheduled_message_id: str
    post_at: int


@dataclass
class UpdatedMessage:
    channel: str
    timestamp: str
    text: Optional[str] = None


@dataclass
class DeletedMessage:
    channel: str
    timestamp: str


@dataclass
class MessageHistory:
    messages: List[Dict[str, Any]] = field(default_factory=list)
    has_more: bool = False
    response_metadata: Optional[Dict[str, Any]] = None


@dataclass
class ChannelList:
    channels: List[Dict[str, Any]] = field(default_factory=list)
    response_metadata: Optional[Dict[str, Any]] = None


@dataclass
class Permalink:
    permalink: str
