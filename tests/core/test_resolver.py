"""Tests for placeholder resolution and template substitution."""

from pathlib import Path

import pytest

from kitcraft.core.resolver import (
    PlaceholderResolver,
    default_placeholders,
    derived_placeholders,
    extract_kit_placeholders,
)
from kitcraft.errors import TemplateEvaluationWarning
from kitcraft.integrations.time.fake import FakeTime
from kitcraft.models import GenerationRequest, Kit, PlaceholderValue
from tests.test_utils.kit_builders import write_kit


def _resolver(**values: str) -> PlaceholderResolver:
    resolver = PlaceholderResolver(FakeTime())
    resolver.set_many(values)
    return resolver


def _request(*placeholders: PlaceholderValue, project_name: str = "demo-app") -> GenerationRequest:
    return GenerationRequest(
        kit_name="go-api",
        project_name=project_name,
        output_path=Path("/tmp/out"),
        placeholders=list(placeholders),
    )


def test_literal_substitution_both_forms() -> None:
    """Test that {{name}} and {{.name}} are replaced."""
    resolver = _resolver(project_name="demo-app")

    assert resolver.process("# {{project_name}} / {{.project_name}}\n") == (
        "# demo-app / demo-app\n"
    )


def test_plain_text_is_untouched() -> None:
    """Test that content without tokens is returned unchanged."""
    assert _resolver().process("no tokens here {x}\n") == "no tokens here {x}\n"


def test_expression_phase_uses_functions() -> None:
    """Test function calls and filters in the expression phase."""
    resolver = _resolver(project_name="demo app")

    assert resolver.process("{{ upper(project_name) }}") == "DEMO APP"
    assert resolver.process("{{ project_name | kebab }}") == "demo-app"
    assert resolver.process("{{ project_name | pascal }}") == "DemoApp"


def test_literal_value_feeds_expression() -> None:
    """Test that phase 1 output is evaluated in phase 2."""
    resolver = _resolver(name="widget")

    assert resolver.process("{{name}}-{{ upper(name) }}") == "widget-WIDGET"


def test_conditional_blocks() -> None:
    """Test {{% if %}} blocks against placeholder values."""
    template = "app\n{{% if use_docker == 'true' %}}\nFROM golang\n{{% endif %}}\ndone\n"

    assert _resolver(use_docker="true").process(template) == "app\nFROM golang\ndone\n"
    assert _resolver(use_docker="false").process(template) == "app\ndone\n"


def test_comments_are_removed() -> None:
    """Test that {{/* */}} comments produce no output."""
    assert _resolver().process("a{{/* internal note */}}b") == "ab"


def test_unknown_placeholder_degrades_to_literal() -> None:
    """Test that an evaluation failure keeps phase 1 output and records a warning."""
    resolver = _resolver(project_name="demo")

    result = resolver.process("{{project_name}} {{ missing_value }}", origin="README.md")

    assert result == "demo {{ missing_value }}"
    assert len(resolver.warnings) == 1
    warning = resolver.warnings[0]
    assert isinstance(warning, TemplateEvaluationWarning)
    assert warning.origin == "README.md"
    assert "missing_value" in str(warning)


def test_syntax_error_degrades_to_literal() -> None:
    """Test that malformed expressions never raise."""
    resolver = _resolver(project_name="demo")

    assert resolver.process("{{project_name}} {{ ( }}") == "demo {{ ( }}"
    assert len(resolver.warnings) == 1


def test_process_path_is_literal_only() -> None:
    """Test that paths get literal substitution but no evaluation."""
    resolver = _resolver(ProjectName="demo-app")

    assert resolver.process_path("cmd/{{.ProjectName}}/main.go") == "cmd/demo-app/main.go"
    assert resolver.process_path("{{ upper(x) }}/a.txt") == "{{ upper(x) }}/a.txt"
    assert resolver.warnings == []


def test_find_missing() -> None:
    """Test that only simple unresolved names are reported, once each."""
    resolver = _resolver(project_name="demo")

    missing = resolver.find_missing(
        "{{project_name}} {{author}} {{ x | upper }} {{.Values.y}} {{author}} {{license}}"
    )

    assert missing == ["author", "license"]


def test_derived_placeholders() -> None:
    """Test the derived forms of a project name."""
    assert derived_placeholders("My-Cool App") == {
        "package_name": "mycoolapp",
        "module_name": "my-cool-app",
        "class_name": "MyCoolApp",
        "const_name": "MY_COOL_APP",
    }


def test_seed_from_request() -> None:
    """Test that request values, derived names and the year are seeded."""
    resolver = PlaceholderResolver(FakeTime())

    resolver.seed_from_request(
        _request(
            PlaceholderValue(name="author", value="Jane"),
            PlaceholderValue(name="license", value="", default="Apache-2.0"),
        )
    )

    values = resolver.values
    assert values["project_name"] == "demo-app"
    assert values["ProjectName"] == "demo-app"
    assert values["current_year"] == "2024"
    assert values["author"] == "Jane"
    assert values["license"] == "Apache-2.0"
    assert values["class_name"] == "DemoApp"


def test_derived_names_win_over_request_values() -> None:
    """Test that derived names always reflect the project name."""
    resolver = PlaceholderResolver(FakeTime())

    resolver.seed_from_request(_request(PlaceholderValue(name="package_name", value="custom")))

    assert resolver.get("package_name") == "demoapp"


def test_seed_from_kit_defaults_only_fill_gaps() -> None:
    """Test that kit defaults never override provided values."""
    kit = Kit(name="go-api", description="d", version="1.0.0", author="Acme")
    request = _request(PlaceholderValue(name="author", value="Jane"))
    resolver = PlaceholderResolver(FakeTime())
    resolver.seed_from_request(request)

    resolver.seed_from_kit(kit, request)

    assert resolver.get("author") == "Jane"
    assert resolver.get("license") == "MIT"
    assert resolver.get("description") == default_placeholders("go-api")["description"]
    assert resolver.get("kit_name") == "go-api"
    assert resolver.get("kit_version") == "1.0.0"
    assert resolver.get("kit_author") == "Acme"


def test_extract_kit_placeholders(tmp_path: Path) -> None:
    """Test that names are collected from paths and content, in first-seen order."""
    kit_path = write_kit(
        tmp_path / "kit",
        files={
            "README.md": "# {{project_name}}\nBy {{ author | upper }}\n",
            "cmd/{{.ProjectName}}/main.go": "// {{ upper(package_name) }} {{ now() }}\n",
            "logo.png": b"\x89PNG",
        },
    )
    ignore = PlaceholderResolver(FakeTime()).function_names

    names = extract_kit_placeholders(kit_path, ignore)

    assert names == ["project_name", "author", "ProjectName"]


def test_extract_kit_placeholders_without_templates(tmp_path: Path) -> None:
    """Test that a kit without templates yields no names."""
    assert extract_kit_placeholders(tmp_path) == []


@pytest.mark.parametrize("content", ["{{}}", "{{ }}", "{{ 42 }}"])
def test_extract_ignores_non_identifiers(tmp_path: Path, content: str) -> None:
    """Test that tokens without a leading identifier are skipped."""
    kit_path = write_kit(tmp_path / "kit", files={"a.txt": content})

    assert extract_kit_placeholders(kit_path) == []


def test_expression_phase_keeps_crlf_line_endings() -> None:
    """Test that Windows line endings survive expression evaluation."""
    resolver = _resolver(name="x")

    assert resolver.process("a\r\n{{ name | upper }}\r\n") == "a\r\nX\r\n"
    assert resolver.process("a\n{{ name | upper }}\n") == "a\nX\n"


def test_crlf_conditional_blocks() -> None:
    """Test that block tags trim CRLF newlines like LF ones."""
    template = (
        "@echo off\r\n{{% if use_docker == 'true' %}}\r\ndocker build .\r\n{{% endif %}}\r\n"
    )

    assert _resolver(use_docker="true").process(template) == "@echo off\r\ndocker build .\r\n"


def test_extract_kit_placeholders_from_block_tags(tmp_path: Path) -> None:
    """Test that names used only in block tags are collected."""
    kit_path = write_kit(
        tmp_path / "kit",
        files={
            "Dockerfile": (
                "{{% if use_docker and db_driver == 'postgres' %}}\n"
                "FROM postgres\n"
                "{{% elif not use_k8s %}}\n"
                "{{% for name, port in ports %}}EXPOSE 80\n{{% endfor %}}\n"
                "{{% endif %}}\n"
            ),
        },
    )
    ignore = PlaceholderResolver(FakeTime()).function_names

    names = extract_kit_placeholders(kit_path, ignore)

    assert names == ["use_docker", "db_driver", "use_k8s", "ports"]
