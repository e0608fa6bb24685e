"""Placeholder resolution and two-phase template substitution.

Phase 1 replaces `{{name}}` and `{{.name}}` literally for every known
placeholder. Phase 2 renders the result as a Jinja2 template against the
placeholder mapping, with the closed function table from
template_functions. Block tags use the same double braces as values
(`{{% if use_docker %}}...{{% endif %}}`) and comments are `{{/* ... */}}`.

A phase-2 failure never aborts generation: it is logged, recorded in
PlaceholderResolver.warnings, and the phase-1 output is used instead.
"""

import logging
import re
from pathlib import Path

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from kitcraft.core.template_functions import TemplateFunction, build_template_functions
from kitcraft.errors import TemplateEvaluationWarning
from kitcraft.integrations.time.abc import Time
from kitcraft.models import GenerationRequest, Kit

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
_MODULE_SEPARATORS = re.compile(r"[\s_]+")
_CONST_SEPARATORS = re.compile(r"[\s\-]+")
_CLASS_SEPARATORS = re.compile(r"[\s_\-]+")
_BLOCK_NAME = re.compile(r"(?<![\w.])[A-Za-z_][A-Za-z0-9_]*")
_STRING_LITERAL = re.compile(r"'[^']*'|\"[^\"]*\"")
_LOOP_TARGETS = re.compile(r"\bfor\s+([\w\s,]+?)\s+in\b")

# Statement keywords, operators and tests that can appear in block tags
BLOCK_KEYWORDS = frozenset(
    {
        "if", "elif", "else", "endif", "for", "endfor", "in", "not", "and",
        "or", "is", "true", "false", "none", "True", "False", "None", "set",
        "endset", "with", "endwith", "defined", "undefined", "loop",
        "recursive", "filter", "endfilter", "raw", "endraw",
    }
)  # fmt: skip


def default_placeholders(kit_name: str) -> dict[str, str]:
    """Values used for common placeholders a request leaves out."""
    return {
        "author": "Developer",
        "license": "MIT",
        "description": f"A project generated from kit {kit_name}",
        "version": "1.0.0",
    }


def derived_placeholders(project_name: str) -> dict[str, str]:
    """Package, module, class and constant forms of a project name.

    `My-Cool App` becomes package `mycoolapp`, module `my-cool-app`,
    class `MyCoolApp` and constant `MY_COOL_APP`.
    """
    name = project_name.strip()
    return {
        "package_name": _NON_ALNUM.sub("", name.lower()),
        "module_name": _MODULE_SEPARATORS.sub("-", name).lower(),
        "class_name": "".join(
            word[:1].upper() + word[1:].lower() for word in _CLASS_SEPARATORS.split(name) if word
        ),
        "const_name": _CONST_SEPARATORS.sub("_", name).upper(),
    }


def scan_tokens(content: str) -> list[str]:
    """Every `{{...}}` token body in content, stripped, in order."""
    return [match.strip() for match in PLACEHOLDER_PATTERN.findall(content)]


class PlaceholderResolver:
    """Owns the placeholder mapping for one generation.

    Construct one per request, seed it, hand it to the tree generator, then
    discard it.
    """

    def __init__(
        self,
        time: Time,
        functions: dict[str, TemplateFunction] | None = None,
    ) -> None:
        self._time = time
        self._placeholders: dict[str, str] = {}
        self._functions = functions if functions is not None else build_template_functions(time)
        self._warnings: list[TemplateEvaluationWarning] = []
        self._env = SandboxedEnvironment(
            block_start_string="{{%",
            block_end_string="%}}",
            comment_start_string="{{/*",
            comment_end_string="*/}}",
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            autoescape=False,
        )
        self._env.globals.update(self._functions)
        self._env.filters.update(self._functions)
        # Shares globals and filters with _env
        self._crlf_env = self._env.overlay(newline_sequence="\r\n")

    @property
    def values(self) -> dict[str, str]:
        """Copy of the current placeholder mapping."""
        return dict(self._placeholders)

    @property
    def function_names(self) -> frozenset[str]:
        return frozenset(self._functions)

    @property
    def warnings(self) -> list[TemplateEvaluationWarning]:
        """Phase-2 failures recorded so far."""
        return self._warnings.copy()

    def get(self, name: str) -> str | None:
        return self._placeholders.get(name)

    def set(self, name: str, value: str) -> None:
        self._placeholders[name] = value

    def set_many(self, placeholders: dict[str, str]) -> None:
        self._placeholders.update(placeholders)

    def seed_from_request(self, request: GenerationRequest) -> None:
        """Set project name, current year, request values and derived names.

        Request values are applied in order, so a later value for the same
        name wins. Derived names are computed last and always reflect the
        project name.
        """
        self.set("project_name", request.project_name)
        # Alias for path templates written as {{.ProjectName}}
        self.set("ProjectName", request.project_name)
        self.set("current_year", str(self._time.now().year))

        for placeholder in request.placeholders:
            self.set(placeholder.name, placeholder.effective_value)

        if request.project_name:
            self.set_many(derived_placeholders(request.project_name))

    def seed_from_kit(self, kit: Kit, request: GenerationRequest) -> None:
        """Set kit identity values and defaults the request did not provide."""
        self.set("kit_name", kit.name)
        self.set("kit_version", kit.version)
        self.set("kit_author", kit.author)

        provided = request.provided_names()
        for name, value in default_placeholders(request.kit_name).items():
            if name not in provided:
                self.set(name, value)

    def process(self, content: str, origin: str = "<content>") -> str:
        """Substitute placeholders in content.

        Args:
            content: Template text
            origin: Label for warnings (usually the template file path)

        Returns:
            Fully resolved text, or the phase-1 result if expression
            evaluation fails
        """
        literal = self._replace_literal(content)
        if "{{" not in literal:
            return literal

        env = self._crlf_env if "\r\n" in literal else self._env
        try:
            return env.from_string(literal).render(self._placeholders)
        except TemplateError as e:
            warning = TemplateEvaluationWarning(origin, str(e))
            logger.warning("%s", warning)
            self._warnings.append(warning)
            return literal

    def process_path(self, path: str) -> str:
        """Substitute placeholders in a relative path (literal phase only)."""
        return self._replace_literal(path)

    def find_missing(self, content: str) -> list[str]:
        """Simple placeholder names used in content that have no value.

        Tokens containing whitespace or a dot are expressions or member
        access, not simple placeholders, and are never reported.
        """
        missing: list[str] = []
        for token in scan_tokens(content):
            if any(ch.isspace() for ch in token) or "." in token:
                continue
            if token not in self._placeholders and token not in missing:
                missing.append(token)
        return missing

    def _replace_literal(self, content: str) -> str:
        result = content
        for name, value in self._placeholders.items():
            result = result.replace(f"{{{{{name}}}}}", value)
            result = result.replace(f"{{{{.{name}}}}}", value)
        return result


def _token_names(token: str) -> list[str]:
    if token.startswith("%"):
        body = _STRING_LITERAL.sub("", token.strip("%"))
        loop_targets = {
            target.strip()
            for match in _LOOP_TARGETS.finditer(body)
            for target in match.group(1).split(",")
        }
        return [
            name
            for name in _BLOCK_NAME.findall(body)
            if name not in BLOCK_KEYWORDS and name not in loop_targets
        ]

    match = _IDENTIFIER.match(token.lstrip("."))
    return [match.group(0)] if match is not None else []


def extract_kit_placeholders(
    kit_path: Path, ignore: frozenset[str] = frozenset()
) -> list[str]:
    """Collect placeholder names used anywhere in a kit's templates.

    Scans the relative path and content of every file under templates/ in
    sorted order. From each token a leading dot is dropped and the leading
    identifier kept, so `{{.ProjectName}}` and `{{ author | upper }}` yield
    `ProjectName` and `author`. Block tags contribute every name they
    reference other than keywords and loop variables, so
    `{{% if use_docker %}}` yields `use_docker`.

    Args:
        kit_path: Kit root directory
        ignore: Names to leave out (typically the template function names)

    Returns:
        Deduplicated names in order of first appearance
    """
    templates_path = kit_path / "templates"
    names: list[str] = []
    if not templates_path.is_dir():
        return names

    for file_path in sorted(path for path in templates_path.rglob("*") if not path.is_dir()):
        relative = file_path.relative_to(templates_path).as_posix()
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Failed to read template %s: %s", file_path, e)
            content = ""

        for token in scan_tokens(relative) + scan_tokens(content):
            for name in _token_names(token):
                if name not in ignore and name not in names:
                    names.append(name)

    return names
