"""Allow running the CLI with ``python -m content_tuner``."""

from content_tuner.cli.main import app

app()
