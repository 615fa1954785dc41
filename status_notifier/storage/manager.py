"""Storage of the last observed status snapshot."""

import json
import logging
import tempfile
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from ..github_client.models import IssueRecord, Snapshot

console = Console()
logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and rewrites the JSON state file holding the last snapshot."""

    def __init__(self, path: str | Path = "data/state.json"):
        """Initialize snapshot store.

        Args:
            path: Location of the state file
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> Snapshot:
        """Load the previous snapshot.

        A missing, unreadable or non-JSON state file is treated as an empty
        snapshot; the problem is logged and nothing is raised. Inside a
        readable file each bucket is read on its own: a bucket that is not a
        list counts as empty and invalid records are skipped, so the other
        buckets survive.

        Returns:
            Snapshot read from disk, or an empty one
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning("State file %s not found; starting from empty state", self.path)
            return Snapshot.empty()
        except (OSError, ValueError) as e:
            logger.error("Error reading or parsing state file %s: %s", self.path, e)
            return Snapshot.empty()

        if not isinstance(data, dict):
            logger.error(
                "State file %s does not hold a JSON object; starting from empty state",
                self.path,
            )
            return Snapshot.empty()

        snapshot = Snapshot.empty()
        for bucket in Snapshot.buckets:
            entries = data.get(bucket.value)
            if entries is None:
                continue
            if not isinstance(entries, list):
                logger.warning(
                    "Bucket %s in %s is not a list; treating it as empty",
                    bucket.value,
                    self.path,
                )
                continue
            for entry in entries:
                try:
                    snapshot.add(bucket, IssueRecord.model_validate(entry))
                except ValidationError as e:
                    logger.warning(
                        "Skipping invalid record in bucket %s of %s: %s",
                        bucket.value,
                        self.path,
                        e,
                    )

        logger.debug("Loaded %d issues from %s", snapshot.total(), self.path)
        return snapshot

    def save(self, snapshot: Snapshot) -> Path:
        """Overwrite the state file with a snapshot.

        The JSON is written to a temporary file in the same directory and
        then moved over the state file, so an interrupted write leaves the
        previous state intact.

        Args:
            snapshot: Snapshot to persist

        Returns:
            Path to the saved file
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                json.dump(snapshot.to_json_dict(), f, indent=2, ensure_ascii=False)
                f.write("\n")
            tmp_path.replace(self.path)
        except Exception as e:
            console.print(f"Error saving state file {self.path}: {e}")
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise

        console.print(f"Saved {snapshot.total()} issues to {self.path}")
        return self.path
