"""Materialize a project directory from a kit's template tree."""

import logging
import os
import stat
from pathlib import Path

from kitcraft.core.resolver import PlaceholderResolver
from kitcraft.errors import AlreadyExistsError, GenerationError
from kitcraft.integrations.script_runner.abc import ScriptRunner
from kitcraft.models import GenerationResult

logger = logging.getLogger(__name__)

POST_GENERATION_SCRIPT = "scaffold.sh"
PROJECT_PATH_ENV_VAR = "KITCRAFT_PROJECT_PATH"
KIT_PATH_ENV_VAR = "KITCRAFT_KIT_PATH"
TEMPLATE_SUFFIX = ".tpl"

TEMPLATE_EXTENSIONS = frozenset(
    {
        ".go", ".mod", ".sum", ".yaml", ".yml", ".json", ".toml",
        ".md", ".txt", ".env", ".dockerfile", ".makefile", ".sh",
        ".js", ".ts", ".jsx", ".tsx", ".css", ".scss", ".html",
        ".py", ".rs", ".java", ".kt", ".cpp", ".c", ".h",
        ".cfg", ".ini", ".rst",
    }
)  # fmt: skip

TEMPLATE_NAME_MARKERS = (
    "makefile",
    "dockerfile",
    "readme",
    "license",
    "gitignore",
    "changelog",
    "contributing",
    "notice",
    "authors",
)


def should_render(path: Path) -> bool:
    """Decide whether a template file gets placeholder substitution.

    Text files are recognized by extension, by a conventional base name
    (README, LICENSE, Makefile, ...) or by a .tpl suffix. Everything else is
    copied byte for byte.
    """
    if path.suffix.lower() in TEMPLATE_EXTENSIONS:
        return True
    base = path.name.lower()
    if any(marker in base for marker in TEMPLATE_NAME_MARKERS):
        return True
    return path.name.endswith(TEMPLATE_SUFFIX)


class TreeGenerator:
    """Copies a template tree, substituting paths and text content."""

    def __init__(self, script_runner: ScriptRunner) -> None:
        self._script_runner = script_runner

    def generate(
        self, source_root: Path, target_root: Path, resolver: PlaceholderResolver
    ) -> GenerationResult:
        """Write the resolved template tree to a new directory.

        The target must not exist. Writes are not transactional: if an I/O
        error stops the walk, files already written stay in place.

        Args:
            source_root: Template tree (a kit's templates/ directory)
            target_root: Directory to create
            resolver: Seeded placeholder resolver

        Returns:
            Counts of rendered and copied files plus template warnings

        Raises:
            AlreadyExistsError: If target_root exists
            GenerationError: If reading the templates or writing output fails, or
                a resolved path points outside target_root
        """
        if target_root.exists():
            raise AlreadyExistsError(target_root, f"Output path '{target_root}' already exists")
        if not source_root.is_dir():
            raise GenerationError(f"Template directory not found: {source_root}")

        warnings_before = len(resolver.warnings)
        rendered = 0
        copied = 0

        try:
            target_root.mkdir(parents=True)
            for dirpath, dirnames, filenames in os.walk(source_root):
                dirnames.sort()
                current = Path(dirpath)
                for dirname in dirnames:
                    destination = self._destination(
                        current / dirname, source_root, target_root, resolver
                    )
                    destination.mkdir(parents=True, exist_ok=True)
                for filename in sorted(filenames):
                    source = current / filename
                    destination = self._destination(source, source_root, target_root, resolver)
                    if self._write_file(source, destination, resolver):
                        rendered += 1
                    else:
                        copied += 1
        except OSError as e:
            raise GenerationError(f"Failed to generate {target_root}: {e}") from e

        logger.info(
            "Generated %s (%d rendered, %d copied)", target_root, rendered, copied
        )
        return GenerationResult(
            output_path=target_root,
            files_rendered=rendered,
            files_copied=copied,
            warnings=[str(w) for w in resolver.warnings[warnings_before:]],
        )

    def run_post_generation_script(self, kit_root: Path, target_root: Path) -> str | None:
        """Run the kit's scaffold.sh inside the generated project, if present.

        Best effort: a failing script does not undo the generated files.

        Returns:
            A warning message if the script failed, otherwise None
        """
        script = kit_root / POST_GENERATION_SCRIPT
        if not script.is_file():
            return None

        logger.info("Running post-generation script %s", script)
        env = {
            PROJECT_PATH_ENV_VAR: str(target_root),
            KIT_PATH_ENV_VAR: str(kit_root),
        }
        try:
            mode = script.stat().st_mode
            script.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
            exit_code = self._script_runner.run(script, target_root, env)
        except (OSError, RuntimeError) as e:
            message = f"Post-generation script failed: {e}"
            logger.warning(message)
            return message

        if exit_code != 0:
            message = f"Post-generation script exited with status {exit_code}"
            logger.warning(message)
            return message

        logger.info("Post-generation script completed")
        return None

    def _destination(
        self, source: Path, source_root: Path, target_root: Path, resolver: PlaceholderResolver
    ) -> Path:
        relative = source.relative_to(source_root).as_posix()
        # An empty placeholder at the start leaves a leading separator
        resolved = resolver.process_path(relative).lstrip("/\\")
        destination = target_root / resolved
        if not destination.resolve().is_relative_to(target_root.resolve()):
            raise GenerationError(
                f"Template path '{relative}' resolves outside the output directory: {resolved!r}"
            )
        return destination

    def _write_file(self, source: Path, destination: Path, resolver: PlaceholderResolver) -> bool:
        data = source.read_bytes()
        rendered = False
        if should_render(source):
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug("Copying %s unchanged: not valid UTF-8", source)
            else:
                data = resolver.process(text, origin=str(source)).encode("utf-8")
                rendered = True

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)
        destination.chmod(stat.S_IMODE(source.stat().st_mode))
        logger.debug("Generated file: %s", destination)
        return rendered
