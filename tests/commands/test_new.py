"""Tests for the new command."""

from pathlib import Path

from click.testing import CliRunner

from kitcraft.cli.cli import cli
from kitcraft.context import KitcraftContext
from tests.test_utils.kit_builders import write_kit


def _add_sample(ctx: KitcraftContext, tmp_path: Path, files: dict[str, str | bytes]) -> None:
    ctx.registry.add(str(write_kit(tmp_path / "src" / "sample", name="sample", files=files)))


def test_new_generates_project(ctx: KitcraftContext, cli_runner: CliRunner, tmp_path: Path) -> None:
    """Test generating into an explicit output directory."""
    _add_sample(
        ctx,
        tmp_path,
        {"{{.ProjectName}}/README.md": "# {{project_name}} by {{author}}\n"},
    )
    output = tmp_path / "out"

    result = cli_runner.invoke(
        cli,
        ["new", "sample", "demo-app", "--output", str(output), "--set", "author=Jane Doe"],
        obj=ctx,
    )

    assert result.exit_code == 0, result.output
    assert "Generated 'demo-app'" in result.output
    readme = output / "demo-app" / "README.md"
    assert readme.read_text(encoding="utf-8") == "# demo-app by Jane Doe\n"


def test_new_defaults_to_cwd(ctx: KitcraftContext, cli_runner: CliRunner, tmp_path: Path) -> None:
    """Test that the output directory defaults to ./PROJECT_NAME."""
    _add_sample(ctx, tmp_path, {"main.go": "package main // {{project_name}}\n"})

    with cli_runner.isolated_filesystem(temp_dir=tmp_path) as cwd:
        result = cli_runner.invoke(cli, ["new", "sample", "widgets"], obj=ctx)

        assert result.exit_code == 0, result.output
        generated = Path(cwd) / "widgets" / "main.go"
        assert generated.read_text(encoding="utf-8") == "package main // widgets\n"


def test_new_warns_about_missing_placeholders(
    ctx: KitcraftContext, cli_runner: CliRunner, tmp_path: Path
) -> None:
    """Test that unset placeholders are reported and left in place."""
    _add_sample(ctx, tmp_path, {"go.mod": "module {{module_path}}\n"})
    output = tmp_path / "out"

    result = cli_runner.invoke(cli, ["new", "sample", "demo", "-o", str(output)], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "no value for placeholders: module_path" in result.output
    assert "Template evaluation failed" in result.output
    assert (output / "go.mod").read_text(encoding="utf-8") == "module {{module_path}}\n"


def test_new_rejects_bad_assignment(ctx: KitcraftContext, cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["new", "sample", "demo", "--set", "novalue"], obj=ctx)

    assert result.exit_code == 2
    assert "expected NAME=VALUE" in result.output


def test_new_unknown_kit(ctx: KitcraftContext, cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(
        cli, ["new", "ghost", "demo", "-o", str(tmp_path / "out")], obj=ctx
    )

    assert result.exit_code == 1
    assert "Error: Kit 'ghost' not found" in result.output
    assert not (tmp_path / "out").exists()


def test_new_existing_output(ctx: KitcraftContext, cli_runner: CliRunner, tmp_path: Path) -> None:
    _add_sample(ctx, tmp_path, {"main.go": "x"})
    output = tmp_path / "taken"
    output.mkdir()

    result = cli_runner.invoke(cli, ["new", "sample", "demo", "-o", str(output)], obj=ctx)

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_new_warns_about_block_tag_placeholders(
    ctx: KitcraftContext, cli_runner: CliRunner, tmp_path: Path
) -> None:
    """Test that names used only in conditionals are reported when unset."""
    _add_sample(ctx, tmp_path, {"Makefile": "{{% if use_docker %}}\ndocker:\n{{% endif %}}\n"})

    result = cli_runner.invoke(
        cli, ["new", "sample", "demo", "-o", str(tmp_path / "out")], obj=ctx
    )

    assert result.exit_code == 0, result.output
    assert "no value for placeholders: use_docker" in result.output
