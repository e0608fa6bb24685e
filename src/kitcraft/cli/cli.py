import logging
from pathlib import Path

import click

from kitcraft import __version__
from kitcraft.cli.commands.kit import kit_group
from kitcraft.cli.commands.new import new
from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.context import create_context
from kitcraft.core.registry_config import HOME_ENV_VAR, FilesystemRegistryConfigOps, default_home

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=HOME_ENV_VAR,
    help="Registry home directory (default: ~/.kitcraft).",
)
@click.option("--debug", is_flag=True, envvar="KITCRAFT_DEBUG", help="Enable debug logging.")
@click.pass_context
@cli_error_boundary
def cli(ctx: click.Context, home: Path | None, debug: bool) -> None:
    """Install project kits and generate projects from them."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    # Tests inject a prepared context through CliRunner.invoke(obj=...)
    if ctx.obj is None:
        config = FilesystemRegistryConfigOps(home or default_home()).load()
        ctx.obj = create_context(config, debug=debug)


cli.add_command(kit_group)
cli.add_command(new)


if __name__ == "__main__":
    cli()
