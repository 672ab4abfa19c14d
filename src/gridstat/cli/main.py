"""Main CLI entry point using rich-click."""

import logging
from pathlib import Path
from typing import Optional

import rich_click as click
from rich.console import Console

from gridstat.core.config import GridStatConfig, load_config
from gridstat.core.exceptions import GridStatError
from gridstat.schedulers.sge.parser import JobInfo, parse_qstat_xml

# Configure rich-click
click.rich_click.SHOW_ARGUMENTS = True

# Global console for Rich output
console = Console()


# Context object to pass state between commands
class Context:
    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: bool = False

    def load_config(self) -> GridStatConfig:
        try:
            return load_config(self.config_path)
        except GridStatError as exc:
            raise click.ClickException(str(exc)) from exc

    def load_job_info(self, xml_file: Optional[Path]) -> JobInfo:
        """Parse a saved qstat XML file, or run qstat when none is given."""
        from gridstat.schedulers.sge.qstat import fetch_job_info

        try:
            if xml_file is not None:
                return parse_qstat_xml(xml_file.read_bytes())
            return fetch_job_info(self.load_config())
        except GridStatError as exc:
            raise click.ClickException(str(exc)) from exc


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.version_option(package_name="gridstat")
@pass_context
def cli(ctx: Context, config: Optional[Path], verbose: bool) -> None:
    """Grid Engine status report tool.

    Parse qstat XML output into jobs and typed host resources.
    """
    ctx.config_path = config
    ctx.verbose = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from gridstat.cli.jobs import jobs
from gridstat.cli.resources import resources
from gridstat.cli.config import config_cmd

cli.add_command(jobs)
cli.add_command(resources)
cli.add_command(config_cmd, name="config")


def main() -> None:
    """Entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
