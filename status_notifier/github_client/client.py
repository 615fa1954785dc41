"""GitHub GraphQL client for project board issues."""

import logging
import os
from datetime import datetime
from typing import Any

import httpx
from pydantic import ValidationError
from rich.console import Console

from ..utils.date_parser import format_datetime_for_github
from .models import Snapshot
from .search import PROJECT_ISSUES_QUERY, build_project_query, classify_issue_nodes

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_TIMEOUT = 30.0


class GitHubGraphQLError(Exception):
    """Raised when the GraphQL API answers with an error payload."""

    def __init__(self, message: str, errors: Any | None = None) -> None:
        super().__init__(message)
        self.errors = errors


class GitHubClient:
    """GitHub GraphQL client authenticated with a bearer token."""

    def __init__(
        self,
        token: str | None = None,
        graphql_url: str = DEFAULT_GRAPHQL_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            graphql_url: GraphQL endpoint
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.graphql_url = graphql_url
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def graphql(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        """Run a GraphQL query and return its ``data`` object.

        Raises:
            httpx.HTTPError: On transport failures or non-2xx responses
            GitHubGraphQLError: If the response carries an ``errors`` payload
        """
        payload = {"query": query, "variables": variables or {}}

        with httpx.Client(transport=self._transport, timeout=self.timeout) as client:
            response = client.post(self.graphql_url, json=payload, headers=self._headers())
            response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise GitHubGraphQLError(
                f"GraphQL response was not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise GitHubGraphQLError("GraphQL response was not a JSON object")
        if "errors" in data:
            raise GitHubGraphQLError("GraphQL query failed", errors=data["errors"])
        return data.get("data")

    def fetch_project_snapshot(
        self,
        org: str,
        project_number: str | int,
        updated_after: datetime,
        status_field: str = "Status",
    ) -> Snapshot:
        """Fetch open project issues and classify them by status.

        Failures never propagate: a transport or API error is logged and an
        empty snapshot is returned.

        Args:
            org: Organization that owns the project
            project_number: Project number within the organization
            updated_after: Only issues updated on or after this date are fetched
            status_field: Name of the single-select status field

        Returns:
            Snapshot of the fetched issues
        """
        search_query = build_project_query(
            org=org,
            project_number=project_number,
            updated_after=format_datetime_for_github(updated_after),
        )
        console.print(f"Searching with query: {search_query}")

        try:
            data = self.graphql(PROJECT_ISSUES_QUERY, {"searchQuery": search_query})
        except GitHubGraphQLError as e:
            logger.error("GraphQL errors: %s (%s)", e, e.errors)
            return Snapshot.empty()
        except httpx.HTTPError as e:
            logger.error("Error fetching project issues: %s", e)
            return Snapshot.empty()

        nodes = ((data or {}).get("search") or {}).get("nodes") or []
        logger.debug("Fetched %d search nodes", len(nodes))
        try:
            return classify_issue_nodes(nodes, status_field, project_number)
        except ValidationError as e:
            logger.error("Unexpected issue payload from GitHub: %s", e)
            return Snapshot.empty()
