"""Smart Set command line interface."""

from smartset.cli.main import app, main

__all__ = ["app", "main"]
