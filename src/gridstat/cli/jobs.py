"""Jobs command - list jobs from a qstat snapshot."""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import rich_click as click
from rich.console import Console
from rich.table import Table

from gridstat import filters
from gridstat.cli.main import Context, pass_context
from gridstat.core.exceptions import GridStatError
from gridstat.core.job import Job, JobList, jobs_from_info
from gridstat.core.timeutil import parse_since, parse_timestamp

console = Console()


def _since(ctx: click.Context, param: click.Parameter, value: Optional[str]):
    if value is None:
        return None
    try:
        return parse_since(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command()
@click.option(
    "--file", "-f", "xml_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read qstat -xml output from a file instead of running qstat",
)
@click.option("--state", "-s", "states", multiple=True, help="Only show jobs in this state (repeatable)")
@click.option("--owner", "-u", help="Only show jobs owned by this user")
@click.option("--expand/--no-expand", default=None, help="Expand task ranges into one row per task")
@click.option("--submitted-after", callback=_since, help="Submitted after (e.g. 2h, 2026-02-23T18:00)")
@click.option("--submitted-before", callback=_since, help="Submitted before (e.g. 2h, 2026-02-23T18:00)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_context
def jobs(
    ctx: Context,
    xml_file: Optional[Path],
    states: tuple[str, ...],
    owner: Optional[str],
    expand: Optional[bool],
    submitted_after: Optional[datetime],
    submitted_before: Optional[datetime],
    as_json: bool,
) -> None:
    """List running jobs followed by pending jobs."""
    job_list = jobs_from_info(ctx.load_job_info(xml_file))

    if states:
        job_list = job_list.filter(filters.has_state(*states))
    if owner:
        job_list = job_list.filter(filters.owned_by(owner))
    if submitted_after is not None:
        job_list = job_list.filter(filters.submitted_after(submitted_after))
    if submitted_before is not None:
        job_list = job_list.filter(filters.submitted_before(submitted_before))

    if expand is None:
        expand = ctx.load_config().expand_tasks
    if expand:
        try:
            job_list = job_list.expand_tasks()
        except GridStatError as exc:
            raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(job_list.to_dicts(), indent=2))
        return

    if not job_list:
        console.print("[yellow]No jobs found[/yellow]")
        return

    try:
        timestamp_format = ctx.load_config().timestamp_format
    except GridStatError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(_job_table(job_list, timestamp_format))


def _job_table(job_list: JobList, timestamp_format: Optional[str] = None) -> Table:
    table = Table(title=f"Jobs ({len(job_list)})")
    table.add_column("Job ID", style="cyan")
    table.add_column("Tasks")
    table.add_column("Name")
    table.add_column("Owner")
    table.add_column("State")
    table.add_column("Prio", justify="right")
    table.add_column("Slots", justify="right")
    table.add_column("Queue / Submitted")

    for job in job_list:
        table.add_row(
            str(job.job_number),
            _tasks_cell(job),
            job.name,
            job.owner,
            _state_style(job.state),
            f"{job.priority:.5f}",
            str(job.slots),
            job.queue_name or _timestamp_cell(job.submitted_time or job.start_time, timestamp_format),
        )
    return table


def _timestamp_cell(raw: str, timestamp_format: Optional[str]) -> str:
    if not raw or timestamp_format is None:
        return raw
    try:
        return parse_timestamp(raw).strftime(timestamp_format)
    except ValueError:
        return raw


def _tasks_cell(job: Job) -> str:
    if job.tasks.task_id:
        return str(job.tasks.task_id)
    return job.tasks.source


def _state_style(state: str) -> str:
    """Apply color to a state code."""
    colors = {
        "r": "[blue]r[/blue]",
        "qw": "[yellow]qw[/yellow]",
        "hqw": "[magenta]hqw[/magenta]",
        "Eqw": "[red]Eqw[/red]",
    }
    return colors.get(state, state)
