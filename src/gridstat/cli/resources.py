"""Resources command - typed per-queue host metrics."""

import json
from pathlib import Path
from typing import Any, Callable, Optional

import rich_click as click
from rich.console import Console
from rich.table import Table

from gridstat.cli.main import Context, pass_context
from gridstat.core.exceptions import GridStatError
from gridstat.core.resources import LOAD_WINDOWS, ResourceList

console = Console()


@click.command()
@click.option(
    "--file", "-f", "xml_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read qstat -xml -F output from a file instead of running qstat",
)
@click.option("--queue", "-q", help="Only show this queue instance")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@pass_context
def resources(ctx: Context, xml_file: Optional[Path], queue: Optional[str], as_json: bool) -> None:
    """Show load, processors and memory for each queue instance.

    Metrics that are missing or malformed for a host are shown as "-";
    they do not affect the other hosts.
    """
    info = ctx.load_job_info(xml_file)
    queues = [q for q in info.queues if q.name and (queue is None or q.name == queue)]

    if as_json:
        click.echo(json.dumps({q.name: _summary(q.resources) for q in queues}, indent=2))
        return

    if not queues:
        console.print("[yellow]No queues found[/yellow]")
        return

    table = Table(title="Queue resources")
    table.add_column("Queue", style="cyan")
    table.add_column("Procs", justify="right")
    table.add_column("Load (1/5/15)", justify="right")
    table.add_column("Mem free", justify="right")
    table.add_column("Mem total", justify="right")
    table.add_column("Swap free", justify="right")

    for q in queues:
        summary = _summary(q.resources)
        loads = "/".join(_fmt(summary[f"load_{w}"]) for w in LOAD_WINDOWS)
        table.add_row(
            q.name,
            _fmt(summary["num_proc"]),
            loads,
            _fmt(summary["mem_free"]),
            _fmt(summary["mem_total"]),
            _fmt(summary["swap_free"]),
        )

    console.print(table)


def _summary(res: ResourceList) -> dict[str, Any]:
    accessors: dict[str, Callable[[], Any]] = {
        "num_proc": res.num_processors,
        "load_short": lambda: res.load("short"),
        "load_medium": lambda: res.load("medium"),
        "load_long": lambda: res.load("long"),
        "mem_free": res.free_memory,
        "mem_total": res.total_memory,
        "mem_used": res.memory_used,
        "swap_free": res.free_swap,
        "swap_total": res.total_swap,
        "swap_used": res.swap_used,
        "virtual_free": res.free_virtual_memory,
        "virtual_total": res.total_virtual,
    }
    summary: dict[str, Any] = {}
    for key, accessor in accessors.items():
        try:
            value = accessor()
        except GridStatError:
            summary[key] = None
            continue
        summary[key] = value.to_dict() if hasattr(value, "to_dict") else value
    return summary


def _fmt(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, dict):
        return f"{value['size']:g}{value['scale']}"
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)
