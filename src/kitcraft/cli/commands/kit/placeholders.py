"""Placeholders command for listing a kit's inputs."""

import click

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import machine_output
from kitcraft.context import KitcraftContext


@click.command()
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def placeholders(ctx: KitcraftContext, name: str) -> None:
    """Print every placeholder a kit declares or uses, one per line."""
    for placeholder in ctx.projects.kit_placeholders(name):
        machine_output(placeholder)
