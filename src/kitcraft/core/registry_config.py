"""Registry configuration loading.

Provides immutable RegistryConfig values loaded from <home>/config.toml.
Loaded once at the CLI entry point; the engine never reads it directly.
"""

import os
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path

from kitcraft.errors import ValidationError
from kitcraft.models.config import DEFAULT_COMMAND_TIMEOUT_SECONDS, RegistryConfig

HOME_ENV_VAR = "KITCRAFT_HOME"
CONFIG_FILENAME = "config.toml"


def default_home() -> Path:
    """Registry home from KITCRAFT_HOME, falling back to ~/.kitcraft."""
    configured = os.environ.get(HOME_ENV_VAR)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".kitcraft"


class RegistryConfigOps(ABC):
    """Abstract interface for loading registry configuration.

    Enables in-memory implementations for tests without touching the
    user's home directory.
    """

    @abstractmethod
    def load(self) -> RegistryConfig:
        """Load registry configuration.

        Returns:
            RegistryConfig with defaults applied for absent keys

        Raises:
            ValidationError: If the config file exists but is malformed
        """
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for error messages)."""
        ...


class FilesystemRegistryConfigOps(RegistryConfigOps):
    """Production implementation that reads <home>/config.toml."""

    def __init__(self, home: Path) -> None:
        self._home = home

    def load(self) -> RegistryConfig:
        """Load config.toml if present, otherwise return the default layout.

        Recognized keys: kits_path, cache_path, command_timeout_seconds.
        Relative paths are resolved against the registry home.
        """
        defaults = RegistryConfig.for_root(self._home)
        config_path = self.path()
        if not config_path.exists():
            return defaults

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValidationError(f"Invalid TOML in {config_path}: {e}") from e

        timeout = data.get("command_timeout_seconds", DEFAULT_COMMAND_TIMEOUT_SECONDS)
        if not isinstance(timeout, int) or timeout <= 0:
            raise ValidationError(
                f"'command_timeout_seconds' in {config_path} must be a positive integer"
            )

        return RegistryConfig(
            root=self._home,
            kits_path=self._resolve(data.get("kits_path"), defaults.kits_path),
            cache_path=self._resolve(data.get("cache_path"), defaults.cache_path),
            command_timeout_seconds=timeout,
        )

    def path(self) -> Path:
        return self._home / CONFIG_FILENAME

    def _resolve(self, value: object, fallback: Path) -> Path:
        if value is None:
            return fallback
        if not isinstance(value, str) or not value:
            raise ValidationError(f"Paths in {self.path()} must be non-empty strings")
        configured = Path(value).expanduser()
        if configured.is_absolute():
            return configured
        return self._home / configured


class InMemoryRegistryConfigOps(RegistryConfigOps):
    """Test implementation that returns a fixed config."""

    def __init__(self, config: RegistryConfig) -> None:
        self._config = config

    def load(self) -> RegistryConfig:
        return self._config

    def path(self) -> Path:
        return Path("/fake/kitcraft/config.toml")
