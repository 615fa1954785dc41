"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .check import check, status

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="status-notifier",
    help="Project board status change notifications for Slack",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="check", context_settings={"help_option_names": ["-h", "--help"]})(
    check
)
app.command(name="status", context_settings={"help_option_names": ["-h", "--help"]})(
    status
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from status_notifier import __version__

    console.print(f"Status Notifier v{__version__}")


if __name__ == "__main__":
    app()
