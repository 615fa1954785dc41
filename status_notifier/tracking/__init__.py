"""Change detection and the notification run."""

from .change_detector import detect_changes
from .pipeline import RunSummary, dispatch_notifications, run_status_check

__all__ = ["detect_changes", "dispatch_notifications", "run_status_check", "RunSummary"]
