"""Tests for snapshot storage."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from status_notifier.github_client.models import Snapshot, StatusBucket
from status_notifier.storage.manager import SnapshotStore


class TestSnapshotStore:
    """Test SnapshotStore class."""

    def test_default_path(self) -> None:
        """Test default state file location."""
        assert SnapshotStore().path == Path("data/state.json")

    def test_load_missing_file_returns_empty(self, state_file: Path) -> None:
        """Test that a missing state file is an empty snapshot."""
        store = SnapshotStore(state_file)

        assert not store.exists()
        assert store.load().is_empty()

    def test_load_invalid_json_returns_empty(self, state_file: Path) -> None:
        """Test that malformed JSON is an empty snapshot."""
        state_file.write_text("{not json", encoding="utf-8")

        assert SnapshotStore(state_file).load().is_empty()

    def test_load_wrong_shape_returns_empty(self, state_file: Path) -> None:
        """Test that JSON of the wrong shape is an empty snapshot."""
        state_file.write_text(json.dumps(["a", "b"]), encoding="utf-8")

        assert SnapshotStore(state_file).load().is_empty()

    def test_load_directory_returns_empty(self, temp_data_dir: Path) -> None:
        """Test that an unreadable path is an empty snapshot."""
        assert SnapshotStore(temp_data_dir).load().is_empty()

    def test_save_then_load(
        self, state_file: Path, make_snapshot: Callable[..., Snapshot]
    ) -> None:
        """Test that a saved snapshot loads back unchanged."""
        store = SnapshotStore(state_file)
        snapshot = make_snapshot(dev=[1, 2], qa=[3], unset=[4])

        assert store.save(snapshot) == state_file
        assert store.load() == snapshot

    def test_save_writes_pretty_json(
        self, state_file: Path, make_snapshot: Callable[..., Snapshot]
    ) -> None:
        """Test on-disk layout of the state file."""
        SnapshotStore(state_file).save(make_snapshot(qa=[9]))

        content = state_file.read_text(encoding="utf-8")
        data = json.loads(content)
        assert list(data) == ["DevelopmentPendingFrontend", "QATesting", "Unset"]
        assert data["QATesting"][0]["updatedAt"] == "2024-05-01T12:00:00Z"
        assert '\n  "QATesting": [' in content
        assert content.endswith("\n")

    def test_save_keeps_non_ascii_titles(
        self, state_file: Path, make_record: Callable
    ) -> None:
        """Test that Japanese titles are written as-is."""
        snapshot = Snapshot.empty()
        snapshot.add(StatusBucket.QA_TESTING, make_record(1, "ログイン修正"))

        SnapshotStore(state_file).save(snapshot)

        assert "ログイン修正" in state_file.read_text(encoding="utf-8")

    def test_save_creates_parent_dirs(
        self, tmp_path: Path, make_snapshot: Callable[..., Snapshot]
    ) -> None:
        """Test that missing parent directories are created."""
        path = tmp_path / "nested" / "dir" / "state.json"

        SnapshotStore(path).save(make_snapshot(dev=[1]))

        assert path.exists()

    def test_save_replaces_previous_state(
        self, state_file: Path, make_snapshot: Callable[..., Snapshot]
    ) -> None:
        """Test that saving overwrites rather than merges."""
        store = SnapshotStore(state_file)
        store.save(make_snapshot(dev=[1, 2, 3]))

        store.save(Snapshot.empty())

        assert store.load().is_empty()

    def test_load_null_bucket_keeps_other_buckets(self, state_file: Path) -> None:
        """Test that a null bucket does not discard the rest of the state."""
        state_file.write_text(
            json.dumps(
                {
                    "DevelopmentPendingFrontend": [
                        {"title": "A", "number": 10, "updatedAt": "2024-01-01T00:00:00Z"}
                    ],
                    "QATesting": None,
                    "Unset": [],
                }
            ),
            encoding="utf-8",
        )

        snapshot = SnapshotStore(state_file).load()

        assert snapshot.numbers(StatusBucket.DEVELOPMENT_PENDING_FRONTEND) == {10}
        assert snapshot.numbers(StatusBucket.QA_TESTING) == set()

    def test_load_non_list_bucket_is_empty(self, state_file: Path) -> None:
        """Test that a bucket of the wrong type counts as empty."""
        state_file.write_text(
            json.dumps(
                {
                    "DevelopmentPendingFrontend": {"number": 1},
                    "QATesting": [
                        {"title": "B", "number": 20, "updatedAt": "2024-01-01T00:00:00Z"}
                    ],
                }
            ),
            encoding="utf-8",
        )

        snapshot = SnapshotStore(state_file).load()

        assert snapshot.numbers(StatusBucket.DEVELOPMENT_PENDING_FRONTEND) == set()
        assert snapshot.numbers(StatusBucket.QA_TESTING) == {20}

    def test_load_skips_invalid_records(self, state_file: Path) -> None:
        """Test that one broken record does not discard its bucket."""
        state_file.write_text(
            json.dumps(
                {
                    "QATesting": [
                        {"title": "no timestamp", "number": 1},
                        {"title": "ok", "number": 2, "updatedAt": "2024-01-01T00:00:00Z"},
                        "garbage",
                    ],
                }
            ),
            encoding="utf-8",
        )

        snapshot = SnapshotStore(state_file).load()

        assert snapshot.numbers(StatusBucket.QA_TESTING) == {2}

    def test_save_leaves_no_temporary_files(
        self, state_file: Path, make_snapshot: Callable[..., Snapshot]
    ) -> None:
        """Test that only the state file remains after saving."""
        SnapshotStore(state_file).save(make_snapshot(dev=[1]))

        assert [p.name for p in state_file.parent.iterdir()] == ["state.json"]

    def test_failed_save_keeps_previous_state(
        self, state_file: Path, make_snapshot: Callable[..., Snapshot]
    ) -> None:
        """Test that an interrupted write leaves the old file readable."""
        store = SnapshotStore(state_file)
        store.save(make_snapshot(dev=[1, 2]))

        with patch(
            "status_notifier.storage.manager.json.dump",
            side_effect=OSError("disk full"),
        ):
            with pytest.raises(OSError, match="disk full"):
                store.save(make_snapshot(qa=[3]))

        assert store.load() == make_snapshot(dev=[1, 2])
        assert [p.name for p in state_file.parent.iterdir()] == ["state.json"]
