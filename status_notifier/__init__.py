"""Project board status watcher that posts Slack notifications."""

__version__ = "0.1.0"
