"""Config command - manage configuration."""

from pathlib import Path

import rich_click as click
from rich.console import Console
from rich.syntax import Syntax

from gridstat.cli.main import Context, pass_context

console = Console()

DEFAULT_CONFIG = '''# gridstat configuration

[qstat]
# Command used to produce the XML report
command = "qstat"
args = ["-xml", "-f", "-F", "-u", "*"]

[display]
# Expand pending task ranges (e.g. 40-55:5) into one row per task
expand_tasks = false
# strftime format for submit/start times in the jobs table (raw text when unset)
# timestamp_format = "%Y-%m-%d %H:%M"
'''


@click.group()
def config_cmd() -> None:
    """Manage configuration."""
    pass


@config_cmd.command("show")
@pass_context
def show(ctx: Context) -> None:
    """Show current configuration."""
    from gridstat.core.config import find_config_file

    config_path = ctx.config_path or find_config_file()

    if config_path is None:
        console.print("[yellow]No configuration file found[/yellow]")
        console.print("Using default settings")
        console.print("\nSearch locations:")
        console.print("  1. ./gridstat.toml")
        console.print("  2. ./pyproject.toml [tool.gridstat]")
        console.print("  3. <git root>/gridstat.toml")
        console.print("  4. ~/.config/gridstat/config.toml")
        return

    console.print(f"[bold]Config file:[/bold] {config_path}")
    console.print()

    content = config_path.read_text()
    syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
    console.print(syntax)


@config_cmd.command("init")
@click.option("--global", "-g", "global_config", is_flag=True, help="Create global config")
def init(global_config: bool) -> None:
    """Create a new configuration file."""
    if global_config:
        config_dir = Path.home() / ".config" / "gridstat"
        config_dir.mkdir(parents=True, exist_ok=True)
        config_path = config_dir / "config.toml"
    else:
        config_path = Path.cwd() / "gridstat.toml"

    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    config_path.write_text(DEFAULT_CONFIG)
    console.print(f"[green]Created {config_path}[/green]")


@config_cmd.command("path")
@pass_context
def path(ctx: Context) -> None:
    """Show path to active configuration file."""
    from gridstat.core.config import find_config_file

    config_path = ctx.config_path or find_config_file()

    if config_path:
        console.print(str(config_path))
    else:
        console.print("[yellow]No configuration file found[/yellow]")
