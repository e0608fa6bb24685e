"""Info command for showing one kit's metadata."""

import click

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import user_output
from kitcraft.context import KitcraftContext


@click.command()
@click.argument("name")
@click.pass_obj
@cli_error_boundary
def info(ctx: KitcraftContext, name: str) -> None:
    """Show details about an installed kit."""
    kit = ctx.registry.get(name)

    user_output(click.style(kit.name, bold=True))
    user_output(f"  Description:  {kit.description}")
    fields = [
        ("Language", kit.language),
        ("Version", kit.version),
        ("Author", kit.author),
        ("Repository", kit.repository or ""),
        ("Tags", ", ".join(kit.tags)),
        ("Dependencies", ", ".join(kit.dependencies)),
        ("Placeholders", ", ".join(kit.placeholders)),
    ]
    for label, value in fields:
        if value:
            user_output(f"  {label + ':':<14}{value}")
    if kit.install_date is not None:
        user_output(f"  {'Installed:':<14}{kit.install_date:%Y-%m-%d %H:%M}")
    user_output(f"  {'Path:':<14}{kit.local_path}")
    for key, value in sorted(kit.metadata.items()):
        user_output(f"  {key + ':':<14}{value}")
