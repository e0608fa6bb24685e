"""Output helpers for CLI commands with clear intent."""

import click
from rich.console import Console


def user_output(message: str = "") -> None:
    """Informational output for humans, written to stderr."""
    click.echo(message, err=True)


def machine_output(message: str = "") -> None:
    """Results meant to be consumed by other programs, written to stdout."""
    click.echo(message)


def stderr_console() -> Console:
    """Rich console for tables, bound to the current stderr."""
    return Console(stderr=True, width=120)
