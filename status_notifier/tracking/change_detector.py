"""Detects issues that newly entered a monitored status bucket."""

from ..github_client.models import MONITORED_BUCKETS, ChangeSet, Snapshot


def detect_changes(old: Snapshot, new: Snapshot) -> ChangeSet:
    """Compare two snapshots bucket by bucket.

    For each monitored bucket the result holds the records of ``new`` whose
    issue number is not in the same bucket of ``old``, in fetch order.
    Issues that left a bucket are not reported, and the unset bucket is
    never part of the result.

    Args:
        old: Snapshot persisted by the previous run
        new: Snapshot built from the current fetch

    Returns:
        ChangeSet of newly arrived issues
    """
    changes = ChangeSet()

    for bucket in MONITORED_BUCKETS:
        known = old.numbers(bucket)
        for record in new.bucket(bucket):
            if record.number not in known:
                changes.add(bucket, record)

    return changes
