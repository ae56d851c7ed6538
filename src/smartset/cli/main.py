"""Main CLI entry point."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from smartset import __version__
from smartset.cli.commands import (
    board_app,
    import_command,
    project_app,
    serve_command,
)
from smartset.cli.formatters.json_formatter import JsonFormatter
from smartset.cli.utils.cli_handler import CLIHandler
from smartset.config import (
    clear_settings_cache,
    configure_logging,
    get_logger,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="smartset",
    help="Film production breakdown and stripboard scheduling",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="import")(import_command)
app.command(name="serve")(serve_command)

app.add_typer(project_app, name="project")
app.add_typer(board_app, name="board")


@app.command()
def status(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show Smart Set status and configuration."""
    handler = CLIHandler(console)
    formatter = JsonFormatter()

    try:
        settings = get_settings()
        status_info: dict[str, object] = {
            "version": __version__,
            "database": str(settings.database_path),
            "database_exists": settings.database_path.exists(),
            "primary_model": settings.llm_primary_model,
            "fallback_models": settings.model_chain[1:],
            "api_key_configured": bool(settings.llm_api_key),
        }

        if settings.database_path.exists():
            from smartset.storage import ProductionStore

            store = ProductionStore.from_settings(settings)
            try:
                status_info["projects"] = len(store.get_projects())
            finally:
                store.close()

        if json_output:
            # Output pure JSON without ANSI escape codes
            print(formatter.format(status_info))
        else:
            console.print("[bold cyan]Smart Set Status[/bold cyan]\n")
            for key, value in status_info.items():
                formatted_key = key.replace("_", " ").title()
                console.print(f"  {formatted_key}: {value}")

    except Exception as e:
        handler.handle_error(e, json_output)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show Smart Set version."""
    if json_output:
        print(JsonFormatter().format({"name": "Smart Set", "version": __version__}))
    else:
        console.print(f"Smart Set v{__version__}")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            envvar="SMARTSET_CONFIG",
        ),
    ] = None,
    database: Annotated[
        Path | None,
        typer.Option("--db", help="SQLite database path"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging", envvar="SMARTSET_DEBUG"),
    ] = False,
) -> None:
    """Configure global options."""
    if debug:
        os.environ["SMARTSET_LOG_LEVEL"] = "DEBUG"
    elif verbose:
        os.environ["SMARTSET_LOG_LEVEL"] = "INFO"
    if debug or verbose:
        clear_settings_cache()

    if config or database:
        settings = get_settings_for_cli(
            config_file=config,
            cli_overrides={"database_path": database},
        )
        set_settings(settings)

    if debug or verbose or config:
        configure_logging(get_settings())
        logger.debug("CLI settings loaded", config=str(config) if config else None)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
