"""Unified CLI handler for standardized error handling and output."""

import asyncio
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from typing import Any

import typer
from rich.console import Console

from smartset.cli.formatters.json_formatter import JsonFormatter
from smartset.config import get_logger, get_settings
from smartset.exceptions import SmartSetError
from smartset.storage import ProductionStore

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Display an error and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        logger.error(
            "Command failed", error=str(error), error_type=type(error).__name__
        )

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, SmartSetError):
            self.console.print(f"[red]Error: {error.message}[/red]")
            if error.hint:
                self.console.print(f"[yellow]Hint: {error.hint}[/yellow]")
        else:
            self.console.print(f"[red]Error: {error}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Handle success responses consistently."""
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{message}[/green]")


@contextmanager
def open_store() -> Iterator[ProductionStore]:
    """Open the configured production store for one command."""
    store = ProductionStore.from_settings(get_settings())
    try:
        yield store
    finally:
        store.close()


def cli_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator for CLI commands with standardized error handling.

    Coroutine functions are run to completion with ``asyncio.run``.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        handler = CLIHandler()
        try:
            if asyncio.iscoroutinefunction(func):
                return asyncio.run(func(*args, **kwargs))
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except Exception as e:
            handler.handle_error(e, kwargs.get("json_output", False))

    return wrapper
