"""Update command for refreshing kits from their repository."""

import click

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import user_output
from kitcraft.context import KitcraftContext


@click.command()
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def update(ctx: KitcraftContext, name: str) -> None:
    """Re-fetch a kit from its repository.

    The previous content is restored if the update fails.
    """
    old_version = ctx.registry.get(name).version
    kit = ctx.registry.update(name)
    if old_version and kit.version and old_version != kit.version:
        user_output(click.style(f"✓ Updated {name}: {old_version} → {kit.version}", fg="green"))
    else:
        user_output(click.style(f"✓ Updated {name}", fg="green"))
