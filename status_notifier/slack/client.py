"""Slack webhook notifier for project board status changes."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from slack_sdk.webhook import WebhookClient

from ..github_client.models import IssueRecord, StatusBucket
from .config import SlackWebhookConfig

logger = logging.getLogger(__name__)

DEFAULT_GITHUB_WEB_URL = "https://github.com"

_TEMPLATES: dict[StatusBucket, tuple[str, str]] = {
    StatusBucket.DEVELOPMENT_PENDING_FRONTEND: (
        "Issue status changed to *開発待ち(Frontend)* : {mention} "
        "次のフロント開発準備OK👍 \n*Issue Title:* <{url}|{title}>",
        ":rocket:",
    ),
    StatusBucket.QA_TESTING: (
        "Issue status changed to *テスト中* : {mention} "
        "テストを開始してください🏃‍♂️ \n*Issue Title:* <{url}|{title}>",
        ":test_tube:",
    ),
}


@dataclass(frozen=True)
class NotificationMessage:
    """Webhook payload for one status change."""

    text: str
    icon_emoji: str

    def to_payload(self) -> dict[str, Any]:
        return {"text": self.text, "icon_emoji": self.icon_emoji}


def build_issue_url(
    org: str, repo: str, issue_number: int, host: str = DEFAULT_GITHUB_WEB_URL
) -> str:
    """Build the web link for an issue."""
    return f"{host.rstrip('/')}/{org}/{repo}/issues/{issue_number}"


def format_notification(
    bucket: StatusBucket, title: str, url: str, mention: str
) -> NotificationMessage:
    """Render the message for an issue that entered a monitored bucket.

    Raises:
        ValueError: If the bucket is not monitored
    """
    try:
        template, icon = _TEMPLATES[bucket]
    except KeyError as e:
        raise ValueError(
            f"No notification template for bucket {bucket.value}"
        ) from e
    return NotificationMessage(
        text=template.format(mention=mention, url=url, title=title),
        icon_emoji=icon,
    )


class SlackNotifier:
    """Posts status change notifications to a Slack incoming webhook."""

    def __init__(
        self,
        org: str,
        repo: str,
        config: Optional[SlackWebhookConfig] = None,
        github_web_url: str = DEFAULT_GITHUB_WEB_URL,
        webhook_client: Optional[WebhookClient] = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            org: Organization used in issue links
            repo: Repository used in issue links
            config: Webhook configuration, read from the environment if omitted
            github_web_url: Host part of issue links
            webhook_client: Pre-built client (used by tests)
        """
        self.org = org
        self.repo = repo
        self.config = config or SlackWebhookConfig()
        self.github_web_url = github_web_url
        self._webhook_client = webhook_client

    @property
    def webhook_client(self) -> WebhookClient:
        """Get or create the Slack WebhookClient."""
        if self._webhook_client is None:
            self.config.validate()
            self._webhook_client = WebhookClient(self.config.webhook_url)
        return self._webhook_client

    def build_message(
        self, bucket: StatusBucket, record: IssueRecord
    ) -> NotificationMessage:
        url = build_issue_url(self.org, self.repo, record.number, self.github_web_url)
        return format_notification(bucket, record.title, url, self.config.mention)

    def notify(self, bucket: StatusBucket, record: IssueRecord) -> bool:
        """Send one notification and wait for the webhook to answer.

        Args:
            bucket: Monitored bucket the issue entered
            record: The issue

        Returns:
            True if Slack accepted the message, False otherwise
        """
        if not self.config.is_configured():
            logger.warning("Slack webhook is not configured, skipping notification")
            return False

        message = self.build_message(bucket, record)

        try:
            response = self.webhook_client.send_dict(message.to_payload())
        except Exception as e:
            logger.error(f"Error posting notification for issue #{record.number}: {e}")
            return False

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Slack webhook rejected notification for issue #{record.number}: "
                f"{response.status_code} {response.body}"
            )
            return False

        logger.info(
            f"Notified {bucket.value} change for issue #{record.number}: {record.title}"
        )
        return True
