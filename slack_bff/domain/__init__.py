"""Domain layer: pure Python, no framework dependencies."""

from slack_bff.domain.errors import (
    ApiError,
    ErrorCode,
    FailureKind,
    SlackClientError,
    translate_upstream_error,
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
    to_payload,
)
from slack_bff.domain.schedule import as_utc, is_in_future, to_epoch_seconds

__all__ = [
    "ApiError",
    "ErrorCode",
    "FailureKind",
    "SlackClientError",
    "translate_upstream_error",
    "ChannelList",
    "DeletedMessage",
    "Identity",
    "MessageDescriptor",
    "MessageHistory",
    "Permalink",
    "ScheduledMessage",
    "SentMessage",
    "TokenGrant",
    "UpdatedMessage",
    "UserProfile",
    "to_payload",
    "as_utc",
    "is_in_future",
    "to_epoch_seconds",
]
