"""GitHub client package for project board queries."""

from .client import GitHubClient, GitHubGraphQLError
from .models import (
    MONITORED_BUCKETS,
    ChangeSet,
    IssueRecord,
    Snapshot,
    StatusBucket,
)
from .search import build_project_query, classify_issue_nodes

__all__ = [
    "GitHubClient",
    "GitHubGraphQLError",
    "IssueRecord",
    "Snapshot",
    "ChangeSet",
    "StatusBucket",
    "MONITORED_BUCKETS",
    "build_project_query",
    "classify_issue_nodes",
]
