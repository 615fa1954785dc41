"""Standardized CLI option definitions for consistent shorthand mappings."""

import typer

STATE_FILE_OPTION = typer.Option(
    None, "--state-file", "-s", help="Snapshot file path (defaults to STATE_FILE env var)"
)

LAST_MONTHS_OPTION = typer.Option(
    None,
    "--last-months",
    help="Only watch issues updated in the last N months (defaults to LOOKBACK_MONTHS)",
)

UPDATED_AFTER_OPTION = typer.Option(
    None, "--updated-after", help="Only watch issues updated on/after date (YYYY-MM-DD)"
)

MAX_NOTIFICATIONS_OPTION = typer.Option(
    1,
    "--max-notifications",
    min=0,
    help="Successful notifications allowed per run (0 = no limit)",
)

DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Show detected changes without notifying or saving"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
