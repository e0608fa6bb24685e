"""Kit commands group."""

import click

from kitcraft.cli.commands.kit.add import add
from kitcraft.cli.commands.kit.info import info
from kitcraft.cli.commands.kit.list import list_kits
from kitcraft.cli.commands.kit.placeholders import placeholders
from kitcraft.cli.commands.kit.remove import remove
from kitcraft.cli.commands.kit.update import update


@click.group("kit")
def kit_group() -> None:
    """Manage installed kits."""


kit_group.add_command(add)
kit_group.add_command(info)
kit_group.add_command(list_kits)
kit_group.add_command(list_kits, name="ls")
kit_group.add_command(placeholders)
kit_group.add_command(remove)
kit_group.add_command(remove, name="rm")
kit_group.add_command(update)
