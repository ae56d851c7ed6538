"""CLI output formatters."""

from smartset.cli.formatters.board_formatter import BoardFormatter
from smartset.cli.formatters.json_formatter import JsonFormatter

__all__ = ["BoardFormatter", "JsonFormatter"]
