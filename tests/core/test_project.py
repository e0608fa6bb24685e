"""Tests for end-to-end project generation."""

from pathlib import Path

import pytest

from kitcraft.context import KitcraftContext
from kitcraft.errors import AlreadyExistsError, NotFoundError, ValidationError
from kitcraft.integrations.script_runner.fake import FakeScriptRunner
from kitcraft.models import GenerationRequest, PlaceholderValue
from tests.test_utils.kit_builders import write_kit


def _install(ctx: KitcraftContext, tmp_path: Path, **kwargs: object) -> None:
    name = str(kwargs.get("name", "sample"))
    ctx.registry.add(str(write_kit(tmp_path / "sources" / name, **kwargs)))  # type: ignore[arg-type]


def test_generate_scenario_hello(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test a kit whose main.go greets the project."""
    _install(ctx, tmp_path, name="sample", files={"main.go": "Hello {{project_name}}"})
    output = tmp_path / "Widgets"

    result = ctx.projects.generate(
        GenerationRequest(kit_name="sample", project_name="Widgets", output_path=output)
    )

    content = (output / "main.go").read_text(encoding="utf-8")
    assert content == "Hello Widgets"
    assert "{{" not in content
    assert result.output_path == output
    assert result.files_rendered == 1


def test_generate_uses_defaults_and_request_values(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test that request values beat defaults and defaults fill the rest."""
    _install(
        ctx,
        tmp_path,
        name="sample",
        files={"LICENSE": "{{license}} {{current_year}} {{author}}\n{{kit_name}}\n"},
    )
    output = tmp_path / "out"

    ctx.projects.generate(
        GenerationRequest(
            kit_name="sample",
            project_name="demo",
            output_path=output,
            placeholders=[PlaceholderValue(name="author", value="Jane")],
        )
    )

    assert (output / "LICENSE").read_text(encoding="utf-8") == "MIT 2024 Jane\nsample\n"


def test_generate_unknown_kit(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test that generation from a kit never added fails with NotFoundError."""
    with pytest.raises(NotFoundError, match="Kit 'ghost' not found"):
        ctx.projects.generate(
            GenerationRequest(kit_name="ghost", project_name="x", output_path=tmp_path / "x")
        )


@pytest.mark.parametrize(
    ("kit_name", "project_name", "message"),
    [("", "demo", "Kit name is required"), ("sample", "", "Project name is required")],
)
def test_validate_request_required_fields(
    ctx: KitcraftContext, tmp_path: Path, kit_name: str, project_name: str, message: str
) -> None:
    with pytest.raises(ValidationError, match=message):
        ctx.projects.validate_request(
            GenerationRequest(
                kit_name=kit_name, project_name=project_name, output_path=tmp_path / "o"
            )
        )


def test_validate_request_required_placeholder(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test that a required placeholder without value or default is rejected."""
    _install(ctx, tmp_path, name="sample")
    request = GenerationRequest(
        kit_name="sample",
        project_name="demo",
        output_path=tmp_path / "o",
        placeholders=[PlaceholderValue(name="module_path", value="", required=True)],
    )

    with pytest.raises(ValidationError, match="module_path"):
        ctx.projects.validate_request(request)


def test_generate_refuses_existing_output(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test that an existing output directory is never modified."""
    _install(ctx, tmp_path, name="sample", files={"main.go": "x"})
    output = tmp_path / "existing"
    output.mkdir()

    with pytest.raises(AlreadyExistsError):
        ctx.projects.generate(
            GenerationRequest(kit_name="sample", project_name="demo", output_path=output)
        )

    assert list(output.iterdir()) == []


def test_generate_runs_post_generation_script(tmp_path: Path) -> None:
    """Test that a failing scaffold.sh becomes a warning on the result."""
    runner = FakeScriptRunner(exit_code=1)
    ctx = KitcraftContext.for_test(tmp_path / "home", script_runner=runner)
    source = write_kit(tmp_path / "sources" / "sample", name="sample", files={"a.txt": "a"})
    (source / "scaffold.sh").write_text("exit 1\n", encoding="utf-8")
    ctx.registry.add(str(source))
    output = tmp_path / "out"

    result = ctx.projects.generate(
        GenerationRequest(kit_name="sample", project_name="demo", output_path=output)
    )

    assert runner.calls[0].cwd == output
    assert result.warnings == ["Post-generation script exited with status 1"]
    assert (output / "a.txt").is_file()


def test_kit_placeholders(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test declared placeholders come first, then those found in templates."""
    _install(
        ctx,
        tmp_path,
        name="sample",
        placeholders=["module_path", "author"],
        files={"go.mod": "module {{module_path}}\n// {{ upper(author) }} {{db_driver}}\n"},
    )

    assert ctx.projects.kit_placeholders("sample") == ["module_path", "author", "db_driver"]


def test_missing_placeholders(ctx: KitcraftContext, tmp_path: Path) -> None:
    """Test that only placeholders without any value are reported."""
    _install(
        ctx,
        tmp_path,
        name="sample",
        files={"go.mod": "module {{module_path}} {{project_name}} {{author}}\n"},
    )
    request = GenerationRequest(kit_name="sample", project_name="demo", output_path=tmp_path / "o")
    kit = ctx.projects.validate_request(request)

    resolver = ctx.projects.build_resolver(kit, request)

    assert ctx.projects.missing_placeholders("sample", resolver) == ["module_path"]
