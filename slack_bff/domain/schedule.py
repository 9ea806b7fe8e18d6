"""Schedule-time normalisation for scheduled messages."""

from datetime import datetime, timezone
from typing import Optional


def as_utc(when: datetime) -> datetime:
    """Return `when` as an aware UTC datetime. Naive values are read as UTC."""
    if when.tzinfo is None:
        return when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc)


def is_in_future(when: datetime, now: Optional[datetime] = None) -> bool:
    """True when `when` is strictly after `now` (default: current UTC time)."""
    now = now or datetime.now(timezone.utc)
    return when > now


def to_epoch_seconds(when: datetime) -> int:
    # Slack's post_at is whole seconds
    return int(when.timestamp())
