"""Stripboard commands: listing, schedule view, moves and shooting days."""

from typing import Annotated

import typer
from rich.console import Console

from smartset.cli.formatters import BoardFormatter, JsonFormatter
from smartset.cli.utils.cli_handler import CLIHandler, cli_command, open_store
from smartset.exceptions import ValidationError
from smartset.scheduling import Direction, StripboardScheduler, date_range

console = Console()

board_app = typer.Typer(
    name="board",
    help="Inspect and edit stripboards",
    pretty_exceptions_enable=False,
    add_completion=False,
)


def _schedule_data(scheduler: StripboardScheduler, board_id: str) -> dict:
    board, view = scheduler.view(board_id)
    return {
        "id": board.id,
        "name": board.name,
        "days": view.days,
        "buckets": [
            {
                "day": bucket.day,
                "strips": [
                    {
                        "strip_id": strip.id,
                        "scene_number": view.scene_for(strip).scene_number,
                        "order": strip.order,
                    }
                    for strip in bucket.strips
                ],
            }
            for bucket in view.buckets
        ],
    }


@board_app.command(name="list")
@cli_command
def list_boards(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List the stripboards of a project."""
    with open_store() as store:
        store.require_project(project_id)
        summaries = StripboardScheduler(store).summaries(project_id)
    if json_output:
        print(JsonFormatter().format(summaries))
    else:
        BoardFormatter(console).print_summaries(summaries)


@board_app.command(name="show")
@cli_command
def show_board(
    board_id: Annotated[str, typer.Argument(help="Stripboard ID")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show a stripboard grouped by shooting day."""
    with open_store() as store:
        scheduler = StripboardScheduler(store)
        if json_output:
            print(JsonFormatter().format(_schedule_data(scheduler, board_id)))
            return
        board, view = scheduler.view(board_id)
        BoardFormatter(console).print_schedule(board, view)


@board_app.command(name="move")
@cli_command
def move_strip(
    board_id: Annotated[str, typer.Argument(help="Stripboard ID")],
    strip_id: Annotated[str, typer.Argument(help="Strip ID")],
    direction: Annotated[Direction, typer.Argument(help="up or down")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Move a strip one position, crossing into the adjacent day at a boundary."""
    with open_store() as store:
        result = StripboardScheduler(store).move(board_id, strip_id, direction)
    data = {
        "moved": result.moved,
        "strip_id": result.strip.id,
        "order": result.strip.order,
        "from_day": result.from_day,
        "to_day": result.to_day,
    }
    if json_output:
        print(JsonFormatter().format(data))
    elif not result.moved:
        console.print("[yellow]Strip is already at the schedule edge.[/yellow]")
    elif result.crossed_bucket:
        console.print(
            f"[green]Moved strip to {result.to_day or 'unscheduled'}[/green] "
            f"(order {result.strip.order:g})"
        )
    else:
        console.print(f"[green]Moved strip {direction.value}[/green]")


@board_app.command(name="days")
@cli_command
def save_days(
    board_id: Annotated[str, typer.Argument(help="Stripboard ID")],
    days: Annotated[
        list[str] | None,
        typer.Option("--day", "-d", help="Shooting day (YYYY-MM-DD), repeatable"),
    ] = None,
    start: Annotated[
        str | None, typer.Option("--start", help="First day of a range")
    ] = None,
    end: Annotated[
        str | None, typer.Option("--end", help="Last day of a range")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Replace the shooting days, remapping scheduled scenes by position."""
    if days and (start or end):
        raise ValidationError(message="Use either --day or --start/--end, not both")
    if not days:
        if not (start and end):
            raise ValidationError(
                message="No shooting days given",
                hint="Pass --day repeatedly or both --start and --end",
            )
        days = date_range(start, end)

    with open_store() as store:
        changed = StripboardScheduler(store).save_days(board_id, days)
    CLIHandler(console).handle_success(
        f"Saved {len(days)} shooting days, rescheduled {len(changed)} scenes",
        data={"days": sorted(days), "rescheduled": [s.id for s in changed]},
        json_output=json_output,
    )


@board_app.command(name="renormalize")
@cli_command
def renormalize(
    board_id: Annotated[str, typer.Argument(help="Stripboard ID")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Rewrite strip orders to consecutive integers within each day."""
    with open_store() as store:
        changed = StripboardScheduler(store).renormalize(board_id)
    CLIHandler(console).handle_success(
        f"Renormalized {changed} day buckets",
        data={"buckets_changed": changed},
        json_output=json_output,
    )
