"""Remove command for uninstalling kits."""

import click

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import user_output
from kitcraft.context import KitcraftContext


@click.command()
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def remove(ctx: KitcraftContext, name: str) -> None:
    """Remove an installed kit."""
    ctx.registry.remove(name)
    user_output(click.style(f"✓ Removed kit '{name}'", fg="green"))
