"""Runtime configuration read from environment variables."""

import os

from .utils.date_parser import DEFAULT_LOOKBACK_MONTHS

DEFAULT_STATE_FILE = "data/state.json"
DEFAULT_STATUS_FIELD = "Status"
DEFAULT_GITHUB_WEB_URL = "https://github.com"
DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


class NotifierConfig:
    """Configuration for the status check run."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.github_token: str = os.getenv("GITHUB_TOKEN", "")
        self.org: str = os.getenv("ORG", "")
        self.project_number: str = os.getenv("PROJECT_NUM", "")
        self.repo: str = os.getenv("REPO", "")
        self.slack_webhook_url: str = os.getenv("SLACK_WEBHOOK_URL", "")
        self.notify_users: str = os.getenv("NOTIFY_USERS", "")
        self.state_file: str = os.getenv("STATE_FILE", DEFAULT_STATE_FILE)
        self.status_field: str = os.getenv("STATUS_FIELD_NAME", DEFAULT_STATUS_FIELD)
        lookback = os.getenv("LOOKBACK_MONTHS", str(DEFAULT_LOOKBACK_MONTHS))
        try:
            self.lookback_months: int = int(lookback)
        except ValueError as e:
            raise ValueError(
                f"LOOKBACK_MONTHS must be a whole number of months, got '{lookback}'"
            ) from e
        self.github_web_url: str = os.getenv("GITHUB_WEB_URL", DEFAULT_GITHUB_WEB_URL)
        self.graphql_url: str = os.getenv("GITHUB_GRAPHQL_URL", DEFAULT_GRAPHQL_URL)

    @property
    def project_key(self) -> str:
        """Project reference used in search queries (``org/number``)."""
        return f"{self.org}/{self.project_number}"

    def validate(self) -> None:
        """Validate configuration and raise error if invalid."""
        if not self.github_token:
            raise ValueError(
                "GITHUB_TOKEN is not set. Please set it in the environment variables."
            )
