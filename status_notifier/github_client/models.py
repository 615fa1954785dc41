"""Pydantic models for project board issues and status snapshots.

The snapshot layout mirrors the JSON state file: one top-level key per status
bucket, each holding the issues seen in that bucket on the last run.
"""

from collections.abc import Iterator
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class StatusBucket(str, Enum):
    """Status buckets an issue can be classified into."""

    DEVELOPMENT_PENDING_FRONTEND = "DevelopmentPendingFrontend"
    QA_TESTING = "QATesting"
    UNSET = "Unset"

    @property
    def option_name(self) -> str:
        """Name of the single-select option on the project board."""
        return _OPTION_NAMES[self]

    @property
    def field_name(self) -> str:
        """Attribute name of this bucket on Snapshot and ChangeSet."""
        return _FIELD_NAMES[self]

    @classmethod
    def from_option_name(cls, value: str | None) -> "StatusBucket":
        """Map a Status field value to its bucket.

        Anything that is not one of the watched options, including a missing
        value, lands in UNSET.
        """
        for bucket in MONITORED_BUCKETS:
            if value == bucket.option_name:
                return bucket
        return cls.UNSET


_OPTION_NAMES: dict[StatusBucket, str] = {
    StatusBucket.DEVELOPMENT_PENDING_FRONTEND: "開発待ち(Frontend)",
    StatusBucket.QA_TESTING: "QA中",
    StatusBucket.UNSET: "未設定",
}

_FIELD_NAMES: dict[StatusBucket, str] = {
    StatusBucket.DEVELOPMENT_PENDING_FRONTEND: "development_pending_frontend",
    StatusBucket.QA_TESTING: "qa_testing",
    StatusBucket.UNSET: "unset",
}

# Dispatch order matters: notifications go out for these buckets in sequence.
MONITORED_BUCKETS: tuple[StatusBucket, ...] = (
    StatusBucket.DEVELOPMENT_PENDING_FRONTEND,
    StatusBucket.QA_TESTING,
)


class IssueRecord(BaseModel):
    """A single issue as observed on the project board."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., description="Issue title")
    number: int = Field(..., description="Issue number within the repository")
    updated_at: datetime = Field(
        ..., alias="updatedAt", description="Timestamp of last update (ISO 8601)"
    )


class _BucketLists(BaseModel):
    """Shared list-per-bucket behaviour for Snapshot and ChangeSet."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    buckets: ClassVar[tuple[StatusBucket, ...]] = ()

    def bucket(self, bucket: StatusBucket) -> list[IssueRecord]:
        """Return the (mutable) list of records held for a bucket."""
        if bucket not in self.buckets:
            raise KeyError(f"{type(self).__name__} has no bucket {bucket.value}")
        records: list[IssueRecord] = getattr(self, bucket.field_name)
        return records

    def numbers(self, bucket: StatusBucket) -> set[int]:
        """Issue numbers present in a bucket."""
        return {record.number for record in self.bucket(bucket)}

    def add(self, bucket: StatusBucket, record: IssueRecord) -> bool:
        """Append a record to a bucket unless its number is already there.

        Returns:
            True if the record was added
        """
        if record.number in self.numbers(bucket):
            return False
        self.bucket(bucket).append(record)
        return True

    def total(self) -> int:
        """Total number of records across all buckets."""
        return sum(len(self.bucket(bucket)) for bucket in self.buckets)

    def is_empty(self) -> bool:
        return self.total() == 0

    def items(self) -> Iterator[tuple[StatusBucket, IssueRecord]]:
        """Yield (bucket, record) pairs in bucket order, then fetch order."""
        for bucket in self.buckets:
            for record in self.bucket(bucket):
                yield bucket, record

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with bucket names and camelCase record keys."""
        return self.model_dump(mode="json", by_alias=True)


class Snapshot(_BucketLists):
    """Classification of every fetched issue into status buckets."""

    buckets: ClassVar[tuple[StatusBucket, ...]] = (
        StatusBucket.DEVELOPMENT_PENDING_FRONTEND,
        StatusBucket.QA_TESTING,
        StatusBucket.UNSET,
    )

    development_pending_frontend: list[IssueRecord] = Field(
        default_factory=list, alias="DevelopmentPendingFrontend"
    )
    qa_testing: list[IssueRecord] = Field(default_factory=list, alias="QATesting")
    unset: list[IssueRecord] = Field(default_factory=list, alias="Unset")

    @classmethod
    def empty(cls) -> "Snapshot":
        """Snapshot with every bucket empty."""
        return cls()


class ChangeSet(_BucketLists):
    """Issues that newly entered a monitored bucket since the last snapshot."""

    buckets: ClassVar[tuple[StatusBucket, ...]] = MONITORED_BUCKETS

    development_pending_frontend: list[IssueRecord] = Field(
        default_factory=list, alias="DevelopmentPendingFrontend"
    )
    qa_testing: list[IssueRecord] = Field(default_factory=list, alias="QATesting")
