"""Error taxonomy shared by the web layer and the Slack adapter."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    MISSING_AUTHORIZATION = "MISSING_AUTHORIZATION"
    MISSING_TOKEN = "MISSING_TOKEN"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_VERIFICATION_FAILED = "TOKEN_VERIFICATION_FAILED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_SCHEDULE_TIME = "INVALID_SCHEDULE_TIME"
    OAUTH_URL_GENERATION_FAILED = "OAUTH_URL_GENERATION_FAILED"
    OAUTH_ERROR = "OAUTH_ERROR"
    MISSING_CODE = "MISSING_CODE"
    OAUTH_CALLBACK_FAILED = "OAUTH_CALLBACK_FAILED"
    GET_USER_INFO_FAILED = "GET_USER_INFO_FAILED"
    SEND_MESSAGE_FAILED = "SEND_MESSAGE_FAILED"
    SCHEDULE_MESSAGE_FAILED = "SCHEDULE_MESSAGE_FAILED"
    RETRIEVE_MESSAGES_FAILED = "RETRIEVE_MESSAGES_FAILED"
    RETRIEVE_MESSAGE_FAILED = "RETRIEVE_MESSAGE_FAILED"
    MESSAGE_NOT_FOUND = "MESSAGE_NOT_FOUND"
    EDIT_MESSAGE_FAILED = "EDIT_MESSAGE_FAILED"
    DELETE_MESSAGE_FAILED = "DELETE_MESSAGE_FAILED"
    GET_CHANNELS_FAILED = "GET_CHANNELS_FAILED"
    GET_PERMALINK_FAILED = "GET_PERMALINK_FAILED"
    SLACK_API_ERROR = "SLACK_API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.MISSING_AUTHORIZATION: 401,
    ErrorCode.MISSING_TOKEN: 401,
    ErrorCode.AUTHENTICATION_FAILED: 401,
    ErrorCode.TOKEN_VERIFICATION_FAILED: 401,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.TOKEN_EXPIRED: 401,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_SCHEDULE_TIME: 400,
    ErrorCode.OAUTH_URL_GENERATION_FAILED: 500,
    ErrorCode.OAUTH_ERROR: 400,
    ErrorCode.MISSING_CODE: 400,
    ErrorCode.OAUTH_CALLBACK_FAILED: 400,
    ErrorCode.GET_USER_INFO_FAILED: 400,
    ErrorCode.SEND_MESSAGE_FAILED: 400,
    ErrorCode.SCHEDULE_MESSAGE_FAILED: 400,
    ErrorCode.RETRIEVE_MESSAGES_FAILED: 400,
    ErrorCode.RETRIEVE_MESSAGE_FAILED: 400,
    ErrorCode.MESSAGE_NOT_FOUND: 404,
    ErrorCode.EDIT_MESSAGE_FAILED: 400,
    ErrorCode.DELETE_MESSAGE_FAILED: 400,
    ErrorCode.GET_CHANNELS_FAILED: 400,
    ErrorCode.GET_PERMALINK_FAILED: 400,
    ErrorCode.SLACK_API_ERROR: 400,
    ErrorCode.NETWORK_ERROR: 503,
    ErrorCode.TIMEOUT_ERROR: 408,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.RATE_LIMIT_EXCEEDED: 429,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
}

# Slack envelope errors that mean the caller's token is unusable
_INVALID_TOKEN_ERRORS = frozenset(
    {"invalid_auth", "not_authed", "token_revoked", "account_inactive"}
)


class ApiError(Exception):
    """Failure reported to the client as {success: false, error, message}."""

    def __init__(self, code: ErrorCode, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status or STATUS_CODES[code]

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, "error": self.code.value, "message": self.message}


class FailureKind(str, Enum):
    ENVELOPE = "envelope"  # Slack answered ok: false
    HTTP = "http"
    NETWORK = "network"
    TIMEOUT = "timeout"


class SlackClientError(Exception):
    """Base error for a failed Slack Web API call."""

    operation = "Slack API call"

    def __init__(
        self,
        detail: str,
        failure: FailureKind = FailureKind.ENVELOPE,
        status: Optional[int] = None,
    ):
        super().__init__(f"{self.operation} failed: {detail}")
        self.detail = detail
        self.failure = failure
        self.status = status


class OAuthExchangeError(SlackClientError):
    operation = "OAuth token exchange"


class TokenVerificationError(SlackClientError):
    operation = "Token verification"


class UserLookupError(SlackClientError):
    operation = "Get user info"


class MessageSendError(SlackClientError):
    operation = "Send message"


class MessageScheduleError(SlackClientError):
    operation = "Schedule message"


class MessageUpdateError(SlackClientError):
    operation = "Update message"


class MessageDeleteError(SlackClientError):
    operation = "Delete message"


class MessageHistoryError(SlackClientError):
    operation = "Get messages"


class ChannelListError(SlackClientError):
    operation = "Get channels"


class PermalinkError(SlackClientError):
    operation = "Get permalink"


def translate_upstream_error(error: SlackClientError, code: ErrorCode) -> ApiError:
    """Map an adapter failure to the response for a route whose failure tag is `code`."""
    if error.failure is FailureKind.TIMEOUT:
        return ApiError(ErrorCode.TIMEOUT_ERROR, "Request timeout")
    if error.failure is FailureKind.NETWORK:
        return ApiError(ErrorCode.NETWORK_ERROR, "Unable to connect to Slack API")
    if error.failure is FailureKind.HTTP:
        return ApiError(
            ErrorCode.SLACK_API_ERROR,
            error.detail or "Slack API request failed",
            status=error.status,
        )
    if error.detail == "token_expired":
        return ApiError(ErrorCode.TOKEN_EXPIRED, "Token has expired")
    if error.detail in _INVALID_TOKEN_ERRORS:
        return ApiError(ErrorCode.INVALID_TOKEN, f"Invalid token: {error.detail}")
    return ApiError(code, str(error))
