"""New command for generating a project from a kit."""

from pathlib import Path

import click

from kitcraft.cli.error_boundary import cli_error_boundary
from kitcraft.cli.output import user_output
from kitcraft.context import KitcraftContext
from kitcraft.models import GenerationRequest, PlaceholderValue


def _parse_assignment(raw: str) -> PlaceholderValue:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got '{raw}'", param_hint="--set")
    return PlaceholderValue(name=name.strip(), value=value)


@click.command()
@click.argument("kit_name")
@click.argument("project_name")
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Directory to create (default: ./PROJECT_NAME).",
)
@click.option(
    "-s",
    "--set",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Placeholder value; may be repeated.",
)
@click.pass_obj
@cli_error_boundary
def new(
    ctx: KitcraftContext,
    kit_name: str,
    project_name: str,
    output: Path | None,
    assignments: tuple[str, ...],
) -> None:
    """Generate a new project from an installed kit.

    Examples:

        kitcraft new go-api billing-service --set author="Jane Doe"
    """
    request = GenerationRequest(
        kit_name=kit_name,
        project_name=project_name,
        output_path=output if output is not None else Path.cwd() / project_name,
        placeholders=[_parse_assignment(raw) for raw in assignments],
    )

    kit = ctx.projects.validate_request(request)
    resolver = ctx.projects.build_resolver(kit, request)
    missing = ctx.projects.missing_placeholders(kit_name, resolver)
    if missing:
        user_output(
            click.style(f"Warning: no value for placeholders: {', '.join(missing)}", fg="yellow")
        )

    result = ctx.projects.generate(request)

    for warning in result.warnings:
        user_output(click.style(f"Warning: {warning}", fg="yellow"))
    total = result.files_rendered + result.files_copied
    user_output(
        click.style(f"✓ Generated '{project_name}' at {result.output_path}", fg="green")
        + f" ({total} files)"
    )
