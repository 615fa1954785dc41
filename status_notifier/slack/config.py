"""Configuration for Slack webhook notifications."""

import os
from typing import Optional


class SlackWebhookConfig:
    """Configuration class for Slack incoming webhook integration."""

    def __init__(
        self, webhook_url: Optional[str] = None, mention: Optional[str] = None
    ) -> None:
        """Initialize Slack configuration, falling back to environment variables."""
        self.webhook_url: str = (
            webhook_url
            if webhook_url is not None
            else os.getenv("SLACK_WEBHOOK_URL", "")
        )
        self.mention: str = mention if mention is not None else os.getenv(
            "NOTIFY_USERS", ""
        )

    def is_configured(self) -> bool:
        """Check if the webhook URL is set."""
        return bool(self.webhook_url)

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.webhook_url:
            raise ValueError(
                "SLACK_WEBHOOK_URL environment variable is required for Slack notifications"
            )
