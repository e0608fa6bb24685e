"""Generate projects from installed kits.

Ties the registry, the resolver and the tree generator together: look up the
kit, seed a resolver from the request and the kit, write the template tree,
then run the kit's post-generation script.
"""

import logging
from dataclasses import replace

from kitcraft.core.generator import TreeGenerator
from kitcraft.core.registry import KitRegistry
from kitcraft.core.resolver import PlaceholderResolver, extract_kit_placeholders
from kitcraft.errors import AlreadyExistsError, ValidationError
from kitcraft.integrations.time.abc import Time
from kitcraft.models import GenerationRequest, GenerationResult, Kit

logger = logging.getLogger(__name__)


class ProjectService:
    """Entry point for project generation."""

    def __init__(self, registry: KitRegistry, generator: TreeGenerator, time: Time) -> None:
        self._registry = registry
        self._generator = generator
        self._time = time

    def validate_request(self, request: GenerationRequest) -> Kit:
        """Check a request before anything is written.

        Returns:
            The kit the request refers to

        Raises:
            ValidationError: If a required field or placeholder is empty
            NotFoundError: If the kit is not installed
        """
        if not request.kit_name:
            raise ValidationError("Kit name is required")
        if not request.project_name:
            raise ValidationError("Project name is required")
        if not request.output_path.parts:
            raise ValidationError("Output path is required")

        missing_required = [
            placeholder.name
            for placeholder in request.placeholders
            if placeholder.required and not placeholder.effective_value
        ]
        if missing_required:
            raise ValidationError(
                f"Required placeholders have no value: {', '.join(missing_required)}"
            )

        return self._registry.get(request.kit_name)

    def kit_placeholders(self, kit_name: str) -> list[str]:
        """Placeholders a kit declares, followed by those its templates use."""
        kit = self._registry.get(kit_name)
        names = list(dict.fromkeys(kit.placeholders))
        ignore = PlaceholderResolver(self._time).function_names
        for name in extract_kit_placeholders(self._registry.kit_path(kit_name), ignore):
            if name not in names:
                names.append(name)
        return names

    def build_resolver(self, kit: Kit, request: GenerationRequest) -> PlaceholderResolver:
        resolver = PlaceholderResolver(self._time)
        resolver.seed_from_request(request)
        resolver.seed_from_kit(kit, request)
        return resolver

    def missing_placeholders(self, kit_name: str, resolver: PlaceholderResolver) -> list[str]:
        """Kit placeholders the resolver has no value for."""
        known = resolver.values
        return [name for name in self.kit_placeholders(kit_name) if name not in known]

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Generate a project.

        Raises:
            ValidationError: If the request is incomplete
            NotFoundError: If the kit is not installed
            AlreadyExistsError: If the output path exists
            GenerationError: If writing the output tree fails
        """
        kit = self.validate_request(request)
        if request.output_path.exists():
            raise AlreadyExistsError(
                request.output_path, f"Output path '{request.output_path}' already exists"
            )

        logger.info("Generating project '%s' from kit '%s'", request.project_name, kit.name)
        kit_path = self._registry.kit_path(request.kit_name)
        resolver = self.build_resolver(kit, request)
        result = self._generator.generate(kit.templates_path, request.output_path, resolver)

        script_warning = self._generator.run_post_generation_script(kit_path, request.output_path)
        if script_warning is not None:
            result = replace(result, warnings=[*result.warnings, script_warning])

        logger.info("Project '%s' generated at %s", request.project_name, request.output_path)
        return result
