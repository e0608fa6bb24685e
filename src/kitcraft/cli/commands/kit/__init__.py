from kitcraft.cli.commands.kit.group import kit_group

__all__ = ["kit_group"]
