"""Allow running dotlink as ``python -m dotlink``."""

from dotlink.cli.main import app

app()
