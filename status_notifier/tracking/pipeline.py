"""One pass of the status check: load, fetch, diff, notify, save."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from ..config import NotifierConfig
from ..github_client.client import GitHubClient
from ..github_client.models import ChangeSet, Snapshot
from ..slack.client import SlackNotifier
from ..storage.manager import SnapshotStore
from ..utils.date_parser import months_ago
from .change_detector import detect_changes

logger = logging.getLogger(__name__)

DEFAULT_MAX_NOTIFICATIONS = 1


@dataclass
class RunSummary:
    """Outcome of a single status check run."""

    previous: Snapshot
    current: Snapshot
    changes: ChangeSet
    cutoff: datetime
    notifications_sent: int = 0
    capped: bool = False
    dry_run: bool = False
    saved: bool = False
    failed: list[int] = field(default_factory=list)


def dispatch_notifications(
    changes: ChangeSet,
    notifier: SlackNotifier,
    max_notifications: int = DEFAULT_MAX_NOTIFICATIONS,
    failed: list[int] | None = None,
) -> tuple[int, bool]:
    """Send one notification per change until the per-run cap is reached.

    Each send completes before the cap is checked. Failed sends do not count
    toward the cap. The cap spans all buckets of the run.

    Args:
        changes: Newly arrived issues, iterated in dispatch order
        notifier: Notifier used for each send
        max_notifications: Successful sends allowed per run; 0 means no cap
        failed: Optional list collecting issue numbers whose send failed

    Returns:
        Tuple of (successful sends, whether the cap stopped dispatch)
    """
    sent = 0
    total = changes.total()
    for processed, (bucket, record) in enumerate(changes.items(), start=1):
        if notifier.notify(bucket, record):
            sent += 1
        elif failed is not None:
            failed.append(record.number)

        if max_notifications and sent >= max_notifications:
            remaining = total - processed
            if remaining > 0:
                logger.info(
                    "Notification cap of %d reached; %d change(s) left unsent",
                    max_notifications,
                    remaining,
                )
            return sent, remaining > 0
    return sent, False


def run_status_check(
    config: NotifierConfig,
    *,
    store: SnapshotStore,
    client: GitHubClient,
    notifier: SlackNotifier,
    cutoff: datetime | None = None,
    now: datetime | None = None,
    dry_run: bool = False,
    max_notifications: int = DEFAULT_MAX_NOTIFICATIONS,
) -> RunSummary:
    """Run the full status check once.

    The new snapshot replaces the stored one whether or not notifications
    went out, including when the fetch failed and came back empty. Only a
    dry run leaves the state file untouched.

    Args:
        config: Runtime configuration
        store: Snapshot store holding the previous state
        client: GitHub client used for the fetch
        notifier: Slack notifier
        cutoff: Explicit "updated since" bound; derived from config if None
        now: Reference time for the lookback window
        dry_run: Skip sending and saving
        max_notifications: Successful sends allowed per run; 0 means no cap

    Returns:
        RunSummary describing what happened
    """
    previous = store.load()

    effective_cutoff = cutoff or months_ago(config.lookback_months, now)
    current = client.fetch_project_snapshot(
        org=config.org,
        project_number=config.project_number,
        updated_after=effective_cutoff,
        status_field=config.status_field,
    )
    if current.is_empty() and not previous.is_empty():
        logger.warning("Fetch returned no issues; the stored state will be cleared")

    changes = detect_changes(previous, current)
    summary = RunSummary(
        previous=previous,
        current=current,
        changes=changes,
        cutoff=effective_cutoff,
        dry_run=dry_run,
    )

    if dry_run:
        logger.info("Dry run: %d change(s) detected, nothing sent", changes.total())
        return summary

    summary.notifications_sent, summary.capped = dispatch_notifications(
        changes, notifier, max_notifications, failed=summary.failed
    )

    store.save(current)
    summary.saved = True
    return summary
