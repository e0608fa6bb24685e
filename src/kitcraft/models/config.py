"""Registry configuration."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_COMMAND_TIMEOUT_SECONDS = 300


@dataclass(frozen=True)
class RegistryConfig:
    """Where kits and update backups live on disk.

    Created once at the CLI entry point and passed explicitly to the registry,
    so tests can point independent registries at temporary directories.
    """

    root: Path
    kits_path: Path
    cache_path: Path
    command_timeout_seconds: int = DEFAULT_COMMAND_TIMEOUT_SECONDS

    @staticmethod
    def for_root(root: Path) -> "RegistryConfig":
        """Build the default <root>/kits and <root>/cache layout."""
        return RegistryConfig(
            root=root,
            kits_path=root / "kits",
            cache_path=root / "cache",
        )
