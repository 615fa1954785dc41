"""Project board search query building and issue classification."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from rich.console import Console

from .models import IssueRecord, Snapshot, StatusBucket

console = Console()

SEARCH_LIMIT = 100
PROJECT_ITEMS_LIMIT = 10
FIELD_VALUES_LIMIT = 10

PROJECT_ISSUES_QUERY = f"""
query($searchQuery: String!) {{
  search(query: $searchQuery, type: ISSUE, first: {SEARCH_LIMIT}) {{
    nodes {{
      __typename
      ... on Issue {{
        id
        number
        title
        updatedAt
        projectItems(first: {PROJECT_ITEMS_LIMIT}) {{
          nodes {{
            project {{
              number
            }}
            fieldValues(first: {FIELD_VALUES_LIMIT}) {{
              nodes {{
                ... on ProjectV2ItemFieldSingleSelectValue {{
                  field {{
                    ... on ProjectV2SingleSelectField {{
                      name
                    }}
                  }}
                  name
                }}
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""


def build_project_query(
    org: str,
    project_number: str | int,
    updated_after: str | None = None,
    state: str = "open",
) -> str:
    """Build GitHub search query for issues on an organization project.

    Args:
        org: Organization that owns the project
        project_number: Project number within the organization
        updated_after: ISO date; only issues updated on or after it match
        state: Issue state (open, closed, all)

    Returns:
        GitHub search query string

    Example:
        >>> build_project_query("myorg", 3, "2024-01-01")
        "is:open is:issue project:myorg/3 updated:>=2024-01-01"
    """
    query_parts = []

    if state != "all":
        query_parts.append(f"is:{state}")

    query_parts.append("is:issue")
    query_parts.append(f"project:{org}/{project_number}")

    if updated_after:
        query_parts.append(f"updated:>={updated_after}")

    return " ".join(query_parts)


def _project_item(
    issue_node: dict[str, Any], project_number: str | int | None
) -> dict[str, Any] | None:
    project_items = (issue_node.get("projectItems") or {}).get("nodes") or []
    if project_number is None:
        return project_items[0] if project_items else None

    for item in project_items:
        number = ((item or {}).get("project") or {}).get("number")
        if number is not None and str(number) == str(project_number).strip():
            return item
    return None


def find_status_value(
    issue_node: dict[str, Any],
    status_field: str,
    project_number: str | int | None = None,
) -> str | None:
    """Return the issue's value for the named single-select field, if any.

    Only the project item belonging to ``project_number`` is read. Items of
    other projects the issue is on are ignored. Without a project number the
    first project item is used.
    """
    item = _project_item(issue_node, project_number)
    if not item:
        return None

    field_values = (item.get("fieldValues") or {}).get("nodes") or []
    for value in field_values:
        # Non single-select values come back as empty objects
        if not value:
            continue
        field = value.get("field") or {}
        if field.get("name") == status_field:
            name = value.get("name")
            return name if isinstance(name, str) else None
    return None


def _format_local_time(value: datetime) -> str:
    return value.astimezone().strftime("%Y/%m/%d %H:%M:%S")


def classify_issue_nodes(
    nodes: Iterable[dict[str, Any]],
    status_field: str = "Status",
    project_number: str | int | None = None,
) -> Snapshot:
    """Sort search result nodes into status buckets.

    Args:
        nodes: ``search.nodes`` from the GraphQL response
        status_field: Name of the single-select field holding the status
        project_number: Project whose item holds the status; first item if None

    Returns:
        Snapshot with every issue placed in exactly one bucket
    """
    snapshot = Snapshot.empty()

    for node in nodes:
        if not node or node.get("__typename") != "Issue":
            continue

        status = find_status_value(node, status_field, project_number)
        bucket = StatusBucket.from_option_name(status)
        record = IssueRecord.model_validate(node)
        snapshot.add(bucket, record)

        console.print(
            f"Title: {record.title}, "
            f"Status: {status or StatusBucket.UNSET.option_name}, "
            f"Number: {record.number}, "
            f"Updated At: {_format_local_time(record.updated_at)}",
            markup=False,
            highlight=False,
        )

    return snapshot
