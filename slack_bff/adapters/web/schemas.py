"""Request bodies accepted by the web API."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slack_bff.domain.models import MessageDescriptor
from slack_bff.domain.schedule import as_utc


class _StrictBody(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class SendMessageRequest(_StrictBody):
    channel: str = Field(min_length=1)
    text: str = Field(min_length=1)
    blocks: Optional[List[Any]] = None
    attachments: Optional[List[Any]] = None
    thread_ts: Optional[str] = Field(default=None, alias="threadTs")

    def to_descriptor(self) -> MessageDescriptor:
        return MessageDescriptor(
            channel=self.channel,
            text=self.text,
            blocks=self.blocks,
            attachments=self.attachments,
            thread_ts=self.thread_ts,
        )


class ScheduleMessageRequest(_StrictBody):
    channel: str = Field(min_length=1)
    text: str = Field(min_length=1)
    schedule_time: datetime = Field(alias="scheduleTime")
    blocks: Optional[List[Any]] = None
    attachments: Optional[List[Any]] = None

    @field_validator("schedule_time", mode="before")
    @classmethod
    def _require_iso_string(cls, value: Any) -> Any:
        # pydantic would also take epoch numbers
        if not isinstance(value, str):
            raise ValueError("scheduleTime must be an ISO 8601 date string")
        return value

    @field_validator("schedule_time")
    @classmethod
    def _normalise_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    def to_descriptor(self) -> MessageDescriptor:
        return MessageDescriptor(
            channel=self.channel,
            text=self.text,
            blocks=self.blocks,
            attachments=self.attachments,
        )


class EditMessageRequest(_StrictBody):
    channel: str = Field(min_length=1)
    timestamp: str = Field(min_length=1)
    text: str = Field(min_length=1)
    blocks: Optional[List[Any]] = None
    attachments: Optional[List[Any]] = None


class VerifyTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: Optional[str] = Field(default=None, alias="accessToken")
