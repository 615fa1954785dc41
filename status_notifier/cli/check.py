"""CLI commands for running the status check and inspecting stored state."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import NotifierConfig
from ..github_client.client import GitHubClient
from ..github_client.models import StatusBucket
from ..slack.client import SlackNotifier
from ..slack.config import SlackWebhookConfig
from ..storage.manager import SnapshotStore
from ..tracking.pipeline import RunSummary, run_status_check
from ..utils.date_parser import format_datetime_for_github, resolve_cutoff
from .options import (
    DRY_RUN_OPTION,
    LAST_MONTHS_OPTION,
    MAX_NOTIFICATIONS_OPTION,
    STATE_FILE_OPTION,
    UPDATED_AFTER_OPTION,
    VERBOSE_OPTION,
)

console = Console()
app = typer.Typer(
    help="Watch project board statuses and notify Slack",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _render_summary(summary: RunSummary) -> None:
    results_table = Table(title="Status Changes")
    results_table.add_column("Status", style="cyan")
    results_table.add_column("Issue #", style="magenta")
    results_table.add_column("Title", style="white")

    for bucket, record in summary.changes.items():
        title = record.title[:50] + "..." if len(record.title) > 50 else record.title
        results_table.add_row(bucket.value, str(record.number), title)

    if summary.changes.is_empty():
        console.print("No issues newly entered a watched status")
    else:
        console.print(results_table)


@app.command()
def check(
    state_file: str | None = STATE_FILE_OPTION,
    last_months: int | None = LAST_MONTHS_OPTION,
    updated_after: str | None = UPDATED_AFTER_OPTION,
    max_notifications: int = MAX_NOTIFICATIONS_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Fetch the project board, notify Slack about new statuses, save state.

    Examples:
        status-notifier check
        status-notifier check --dry-run --last-months 3
        status-notifier check --max-notifications 0
    """
    _configure_logging(verbose)

    try:
        config = NotifierConfig()
        config.validate()
        if updated_after is None and last_months is None:
            last_months = config.lookback_months
        cutoff = resolve_cutoff(updated_after=updated_after, last_months=last_months)
    except ValueError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    store = SnapshotStore(state_file or config.state_file)

    params_table = Table(title="Check Parameters")
    params_table.add_column("Parameter", style="cyan")
    params_table.add_column("Value", style="green")
    params_table.add_row("Project", config.project_key)
    params_table.add_row("Repository", f"{config.org}/{config.repo}")
    params_table.add_row("Updated Since", format_datetime_for_github(cutoff))
    params_table.add_row("State File", str(store.path))
    params_table.add_row(
        "Max Notifications", str(max_notifications) if max_notifications else "No limit"
    )
    params_table.add_row("Dry Run", "Yes" if dry_run else "No")
    console.print(params_table)

    try:
        client = GitHubClient(token=config.github_token, graphql_url=config.graphql_url)
        notifier = SlackNotifier(
            org=config.org,
            repo=config.repo,
            config=SlackWebhookConfig(
                webhook_url=config.slack_webhook_url, mention=config.notify_users
            ),
            github_web_url=config.github_web_url,
        )

        console.print("🔎 Fetching project board issues...")
        summary = run_status_check(
            config,
            store=store,
            client=client,
            notifier=notifier,
            cutoff=cutoff,
            dry_run=dry_run,
            max_notifications=max_notifications,
        )
    except ValueError as e:
        console.print(f"❌ Error: {e}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Unexpected error: {e}")
        console.print("Please check your GitHub token and network connection.")
        raise typer.Exit(1)

    _render_summary(summary)

    if dry_run:
        console.print("🧪 Dry run: no notifications sent, state file untouched")
        return

    console.print(f"📣 Notifications sent: {summary.notifications_sent}")
    if summary.failed:
        console.print(
            "⚠️  Failed to notify: " + ", ".join(f"#{n}" for n in summary.failed)
        )
    if summary.capped:
        console.print("⏹️  Notification limit reached for this run")
    console.print(f"💾 State saved to {store.path}")


@app.command()
def status(state_file: str | None = STATE_FILE_OPTION) -> None:
    """Show the stored snapshot per status."""
    try:
        config = NotifierConfig()
    except ValueError as e:
        console.print(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    store = SnapshotStore(state_file or config.state_file)

    console.print(f"📊 Stored state: {store.path}")
    if not store.exists():
        console.print("No state file found.")
        return

    snapshot = store.load()

    stats_table = Table(title="Issues by Status")
    stats_table.add_column("Status", style="cyan")
    stats_table.add_column("Board Option", style="magenta")
    stats_table.add_column("Issues", justify="right", style="green")
    stats_table.add_column("Numbers", style="white")

    for bucket in StatusBucket:
        records = snapshot.bucket(bucket)
        stats_table.add_row(
            bucket.value,
            bucket.option_name,
            str(len(records)),
            ", ".join(f"#{record.number}" for record in records),
        )

    console.print(stats_table)


if __name__ == "__main__":
    app()
