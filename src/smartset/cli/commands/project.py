"""Project management commands."""

from typing import Annotated

import typer
from rich.console import Console

from smartset.cli.formatters import BoardFormatter, JsonFormatter
from smartset.cli.utils.cli_handler import cli_command, open_store
from smartset.models import ProductionType

console = Console()

project_app = typer.Typer(
    name="project",
    help="Create and list productions",
    pretty_exceptions_enable=False,
    add_completion=False,
)


@project_app.command(name="list")
@cli_command
def list_projects(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List all projects."""
    with open_store() as store:
        projects = store.get_projects()
    if json_output:
        print(JsonFormatter().format(projects))
    else:
        BoardFormatter(console).print_projects(projects)


@project_app.command(name="create")
@cli_command
def create_project(
    name: Annotated[str, typer.Argument(help="Project name")],
    production_type: Annotated[
        ProductionType,
        typer.Option("--type", "-t", help="Production type"),
    ] = ProductionType.FEATURE,
    shoot_days: Annotated[
        list[str] | None,
        typer.Option("--day", "-d", help="Shooting day (YYYY-MM-DD), repeatable"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Create a project."""
    with open_store() as store:
        project = store.create_project(name, production_type, shoot_days or [])
    if json_output:
        print(JsonFormatter().format(project))
    else:
        console.print(
            f"[green]Created project[/green] {project.name} "
            f"([cyan]{project.code}[/cyan]) [dim]{project.id}[/dim]"
        )
