"""Port interfaces (Hexagonal Architecture)."""

from slack_bff.ports.outbound import ChatPlatformPort

__all__ = ["ChatPlatformPort"]
