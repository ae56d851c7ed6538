"""REST API server command."""

from typing import Annotated

import typer
from rich.console import Console

from smartset.config import get_settings

console = Console()


def serve_command(
    host: Annotated[
        str | None, typer.Option("--host", "-h", help="API host address")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", "-p", help="API port number")
    ] = None,
) -> None:
    """Start the REST API server."""
    from smartset.api.main import main as run_api

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    console.print("[blue]Starting Smart Set REST API server...[/blue]")
    console.print(f"[dim]Docs: http://{host}:{port}/api/v1/docs[/dim]")
    run_api(host=host, port=port)
