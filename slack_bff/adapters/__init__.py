"""Adapters: Slack Web API client and the FastAPI web layer."""
