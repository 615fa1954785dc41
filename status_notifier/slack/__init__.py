"""Slack integration module for status change notifications."""

from .client import SlackNotifier, build_issue_url, format_notification
from .config import SlackWebhookConfig

__all__ = ["SlackNotifier", "SlackWebhookConfig", "build_issue_url", "format_notification"]
