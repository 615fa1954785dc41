"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import pytest

from status_notifier.github_client.models import IssueRecord, Snapshot, StatusBucket

RecordFactory = Callable[..., IssueRecord]
SnapshotFactory = Callable[..., Snapshot]


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create temporary data directory."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(parents=True)
    return data_dir


@pytest.fixture
def state_file(temp_data_dir: Path) -> Path:
    """Path of a not-yet-written state file."""
    return temp_data_dir / "state.json"


@pytest.fixture
def make_record() -> RecordFactory:
    """Factory for issue records with a fixed timestamp."""

    def _make(number: int, title: str | None = None) -> IssueRecord:
        return IssueRecord(
            title=title or f"Issue {number}",
            number=number,
            updated_at=datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def make_snapshot(make_record: RecordFactory) -> SnapshotFactory:
    """Factory for snapshots built from issue numbers per bucket."""

    def _make(
        dev: list[int] | None = None,
        qa: list[int] | None = None,
        unset: list[int] | None = None,
    ) -> Snapshot:
        snapshot = Snapshot.empty()
        for bucket, numbers in (
            (StatusBucket.DEVELOPMENT_PENDING_FRONTEND, dev),
            (StatusBucket.QA_TESTING, qa),
            (StatusBucket.UNSET, unset),
        ):
            for number in numbers or []:
                snapshot.add(bucket, make_record(number))
        return snapshot

    return _make
