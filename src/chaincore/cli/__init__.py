"""chaincore command-line interface."""

from chaincore.cli.app import app

__all__ = ["app"]
