"""List command for showing installed kits."""

import click
from rich.table import Table

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import stderr_console, user_output
from kitcraft.context import KitcraftContext


@click.command(name="list")
@click.option("-v", "--verbose", is_flag=True, help="Show language, author, tags and path.")
@click.pass_obj
@cli_error_boundary
def list_kits(ctx: KitcraftContext, verbose: bool) -> None:
    """List installed kits."""
    kits = ctx.registry.list_kits()
    if not kits:
        user_output("No kits installed")
        user_output("Use 'kitcraft kit add <source>' to add a kit")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("name", style="cyan", no_wrap=True)
    table.add_column("version")
    table.add_column("description")
    if verbose:
        table.add_column("language")
        table.add_column("author")
        table.add_column("tags")
        table.add_column("path", no_wrap=True)

    for kit in kits:
        row = [kit.name, kit.version or "-", kit.description]
        if verbose:
            row += [
                kit.language or "-",
                kit.author or "-",
                ", ".join(kit.tags) or "-",
                str(kit.local_path),
            ]
        table.add_row(*row)

    user_output(f"Installed kits ({len(kits)}):")
    console = stderr_console()
    console.print(table)
