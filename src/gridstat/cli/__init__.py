"""Command-line interface for gridstat."""

from gridstat.cli.main import cli, main

__all__ = ["cli", "main"]
