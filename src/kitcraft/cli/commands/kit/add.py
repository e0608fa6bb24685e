"""Add command for installing kits."""

import click

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import user_output
from kitcraft.context import KitcraftContext
from kitcraft.core.registry import extract_kit_name


@click.command()
@click.argument("source")
@click.option("-f", "--force", is_flag=True, help="Replace an installed kit with the same name.")
@click.pass_obj
@cli_error_boundary
def add(ctx: KitcraftContext, source: str, force: bool) -> None:
    """Install a kit from a local path, git repository or .tar.gz URL.

    Examples:

        # Add kit from GitHub
        kitcraft kit add https://github.com/acme/go-api-kit

        # Add kit from an archive
        kitcraft kit add https://example.com/kits/web-kit.tar.gz
    """
    if force:
        name = extract_kit_name(source)
        if ctx.registry.exists(name):
            user_output(f"Removing existing kit '{name}'")
            ctx.registry.remove(name)

    kit = ctx.registry.add(source)
    version = f" v{kit.version}" if kit.version else ""
    user_output(click.style(f"✓ Added kit '{kit.name}'{version}", fg="green"))
