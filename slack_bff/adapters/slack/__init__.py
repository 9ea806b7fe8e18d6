"""Slack adapter: Web API client implementing ChatPlatformPort."""

from slack_bff.adapters.slack.client import DEFAULT_CHANNEL_TYPES, SlackClient

__all__ = ["DEFAULT_CHANNEL_TYPES", "SlackClient"]
