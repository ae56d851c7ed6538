"""Rich table rendering of projects and stripboards."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from smartset.models import Project, Stripboard
from smartset.scheduling import BoardSummary, ScheduleView
from smartset.utils.eighths import format_eighths

UNSCHEDULED_TITLE = "Unscheduled"


class BoardFormatter:
    """Prints projects, board listings and day-bucket schedules."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_projects(self, projects: list[Project]) -> None:
        if not projects:
            self.console.print("[yellow]No projects yet.[/yellow]")
            return
        table = Table(title="Projects")
        table.add_column("ID", style="dim")
        table.add_column("Code", style="cyan")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Scenes", justify="right")
        table.add_column("Pages", justify="right")
        for project in projects:
            table.add_row(
                project.id,
                project.code,
                project.name,
                project.type.value,
                str(project.total_scenes),
                format_eighths(project.total_pages),
            )
        self.console.print(table)

    def print_summaries(self, summaries: list[BoardSummary]) -> None:
        if not summaries:
            self.console.print("[yellow]No stripboards for this project.[/yellow]")
            return
        table = Table(title="Stripboards")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Scenes", justify="right")
        table.add_column("Days", justify="right")
        table.add_column("Pages", justify="right")
        for summary in summaries:
            table.add_row(
                summary.board_id,
                summary.name,
                str(summary.scene_count),
                str(summary.day_count),
                summary.total_eighths,
            )
        self.console.print(table)

    def print_schedule(self, board: Stripboard, view: ScheduleView) -> None:
        """Print one table per bucket, unscheduled first."""
        self.console.print(
            f"[bold cyan]{board.name}[/bold cyan] [dim]{board.id}[/dim]"
        )
        for bucket in view.buckets:
            title = bucket.day or UNSCHEDULED_TITLE
            pages = sum(view.scene_for(s).pages for s in bucket.strips)
            table = Table(title=f"{title} ({format_eighths(pages)} pages)")
            table.add_column("Strip", style="dim")
            table.add_column("Order", justify="right")
            table.add_column("Sc.", style="cyan")
            table.add_column("I/E")
            table.add_column("D/N")
            table.add_column("Set")
            table.add_column("Pages", justify="right")
            for strip in bucket.strips:
                scene = view.scene_for(strip)
                table.add_row(
                    strip.id,
                    f"{strip.order:g}",
                    scene.scene_number,
                    scene.int_ext.value if scene.int_ext else "",
                    scene.day_night.value if scene.day_night else "",
                    scene.set_name,
                    scene.page_count_in_eighths,
                )
            self.console.print(table)
