"""Screenplay import: run a breakdown job locally and import its result."""

import base64
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from smartset.breakdown.importer import import_breakdown
from smartset.breakdown.jobs import BreakdownJobRunner, JobStore
from smartset.cli.formatters import JsonFormatter
from smartset.cli.utils.cli_handler import cli_command, open_store
from smartset.config import get_logger, get_settings
from smartset.exceptions import LLMError, ValidationError
from smartset.llm import LLMClient
from smartset.models import AnalysisJob, JobStatus

logger = get_logger(__name__)
console = Console()


@cli_command
async def import_command(
    project_id: Annotated[str, typer.Argument(help="Project to import into")],
    pdf_path: Annotated[
        Path,
        typer.Argument(help="Screenplay PDF", exists=True, dir_okay=False),
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Break down a screenplay PDF and replace the project's scenes with it."""
    settings = get_settings()
    if pdf_path.suffix.lower() != ".pdf":
        raise ValidationError(
            message=f"Not a PDF file: {pdf_path.name}",
            hint="Export the screenplay to PDF first",
        )
    pdf_base64 = base64.b64encode(pdf_path.read_bytes()).decode("ascii")

    client = LLMClient.from_settings(settings)
    runner = BreakdownJobRunner(JobStore(settings.job_ttl_seconds), client)
    last_step = ""

    def report(job: AnalysisJob) -> None:
        nonlocal last_step
        if job.step != last_step and not json_output:
            console.print(f"[dim]{job.status.value}:[/dim] {job.step}")
        last_step = job.step

    try:
        with open_store() as store:
            store.require_project(project_id)
            job = await runner.start(pdf_base64)
            job = await runner.wait(job.id, settings.job_poll_interval, report)
            if job.status is JobStatus.ERROR or job.result is None:
                raise LLMError(
                    message=job.error or "Breakdown failed",
                    details={"model": job.model_id, "raw_preview": job.raw_preview},
                )
            imported = import_breakdown(store, project_id, job.result, pdf_path.name)
    finally:
        await client.aclose()

    summary = {
        "job_id": job.id,
        "model": job.model_id,
        "scenes": len(imported.scenes),
        "elements": len(imported.elements),
        "stripboard_id": imported.stripboard.id,
        "script_version": imported.script_version.version,
    }
    if json_output:
        print(JsonFormatter().format(summary))
    else:
        console.print(
            f"[green]Imported {summary['scenes']} scenes and "
            f"{summary['elements']} elements[/green] with {job.model_id}"
        )
        console.print(f"Stripboard: [cyan]{imported.stripboard.id}[/cyan]")
