"""Kit and generation request models."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class Kit:
    """An installed kit as described by its metadata.yaml.

    local_path and install_date are derived from the registry layout and are
    never written back to metadata.
    """

    name: str
    description: str
    language: str = ""
    version: str = ""
    author: str = ""
    repository: str | None = None
    dependencies: list[str] = field(default_factory=list)
    placeholders: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    local_path: Path | None = None
    install_date: datetime | None = None

    @property
    def templates_path(self) -> Path:
        """Directory holding the kit's substitutable file tree."""
        if self.local_path is None:
            raise ValueError(f"Kit '{self.name}' has no local path")
        return self.local_path / "templates"


@dataclass(frozen=True)
class PlaceholderValue:
    """A named value supplied by a caller or a kit default."""

    name: str
    value: str
    description: str = ""
    required: bool = False
    default: str = ""

    @property
    def effective_value(self) -> str:
        """The explicit value, falling back to the default when empty."""
        if self.value:
            return self.value
        return self.default


@dataclass(frozen=True)
class GenerationRequest:
    """Everything needed to generate one project from one kit."""

    kit_name: str
    project_name: str
    output_path: Path
    placeholders: list[PlaceholderValue] = field(default_factory=list)
    options: dict[str, str] = field(default_factory=dict)

    def provided_names(self) -> set[str]:
        """Names of placeholders explicitly supplied in this request."""
        return {placeholder.name for placeholder in self.placeholders}


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generation that completed the tree copy."""

    output_path: Path
    files_rendered: int
    files_copied: int
    warnings: list[str] = field(default_factory=list)
