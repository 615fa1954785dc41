"""Allow ``python -m status_notifier``."""

from .cli.main import app

if __name__ == "__main__":
    app()
