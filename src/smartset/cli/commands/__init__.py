"""CLI commands."""

from smartset.cli.commands.board import board_app
from smartset.cli.commands.breakdown import import_command
from smartset.cli.commands.project import project_app
from smartset.cli.commands.server import serve_command

__all__ = ["board_app", "import_command", "project_app", "serve_command"]
